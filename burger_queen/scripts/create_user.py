"""
Create a user directly in the store (e.g. extra staff accounts). Run from project root:
  python -m burger_queen.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m burger_queen.scripts.create_user waiter@burgerqueen.test secret user
"""
import argparse
import sys

from burger_queen.core.database import SessionLocal
from burger_queen.core.errors import ValidationError
from burger_queen.core.security import hash_password
from burger_queen.services.authorization import Role, validate_new_user
from burger_queen.services.users import find_by_email, insert_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Burger Queen user.")
    parser.add_argument("email", help="Email address (used to log in)")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    try:
        email, password, role = validate_new_user(
            {"email": args.email.strip(), "password": args.password, "role": args.role}
        )
    except ValidationError as e:
        print(e.message, file=sys.stderr)
        return 1
    if "@" not in email:
        print("Email must contain '@'.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if find_by_email(db, email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = insert_user(db, email, hash_password(password), role)
        print(f"Created user '{email}' (id {user.id}) with role '{role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
