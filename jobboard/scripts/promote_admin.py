"""
Grant admin access to an existing employer or job seeker account.
Usage: python -m jobboard.scripts.promote_admin user@example.com
"""
import sys

from jobboard.database import SessionLocal, ensure_tables_exist
from jobboard.repos.user_repo import get_by_email, update


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m jobboard.scripts.promote_admin <email>")
        sys.exit(1)
    email = sys.argv[1].strip()
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_email(db, email)
        if not user:
            print(f"No account found for {email}")
            sys.exit(1)
        if user.is_admin:
            print(f"{email} ({user.role.value}) is already an admin.")
            return
        update(db, user.id, is_admin=True)
        print(f"Granted admin access to {email} ({user.role.value}).")
    finally:
        db.close()


if __name__ == "__main__":
    main()
