# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Create a principal that can log in and call the registry.

    python bin/create_principal.py alice 'S3cret-pass'
    python bin/create_principal.py            # uses FIRST_PRINCIPAL / FIRST_PRINCIPAL_PASSWORD

Run after the initial migration.  Existing principals are left untouched.
"""

import argparse
import os
import sys

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/create_principal.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.config import settings          # noqa: E402
from core.logger import logger            # noqa: E402
from core.security import hash_password   # noqa: E402
from database import SessionLocal         # noqa: E402
from models.principal import Principal    # noqa: E402


def create_principal(name: str, password: str) -> bool:
    """Insert *name* unless it already exists.  Returns True if created."""
    db = SessionLocal()
    try:
        if db.query(Principal).filter(Principal.name == name).first():
            logger.info("principal '%s' already exists – skipping", name)
            return False

        db.add(Principal(name=name, password_hash=hash_password(password), is_active=True))
        db.commit()
        logger.info("principal '%s' created", name)
        return True
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a registry principal")
    parser.add_argument("name", nargs="?", default=settings.first_principal)
    parser.add_argument("password", nargs="?", default=settings.first_principal_password)
    args = parser.parse_args(argv)

    if not args.name or not args.password:
        parser.error("principal name and password are required (or set FIRST_PRINCIPAL / FIRST_PRINCIPAL_PASSWORD)")

    create_principal(args.name, args.password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
