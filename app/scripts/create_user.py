"""
Create a user with one or more roles. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [ROLE ...] [--email EMAIL]
Example:
  python -m app.scripts.create_user teacher2 s3cret-pass ADMIN --email t2@example.com
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal, engine, init_db
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from app.services.identity_store import IdentityStore
from app.services.seed import STUDENT_ROLE, create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a gradebook user (no registration UI).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("roles", nargs="*", default=[STUDENT_ROLE], help="Role names, e.g. ADMIN STUDENT")
    parser.add_argument("--email", default=None)
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    roles = [r.strip().upper() for r in args.roles if r.strip()]

    if get_settings().AUTO_CREATE_SCHEMA:
        init_db(engine)
    db = SessionLocal()
    try:
        store = IdentityStore(db)
        if store.find_user_by_username(username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        create_user(store, username, args.password, roles, email=args.email)
        logger.info("Created user '%s' with roles %s", username, ", ".join(roles) or "(none)")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
