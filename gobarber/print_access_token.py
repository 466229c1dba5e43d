"""Print a bearer token for a user id, for local development.

Usage:
    python -m gobarber.print_access_token <user_id>
"""
import sys

from gobarber.auth.jwt_handler import create_access_token


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1 or not args[0].isdigit():
        print("Usage: python -m gobarber.print_access_token <user_id>", file=sys.stderr)
        sys.exit(1)
    print(create_access_token(subject=args[0]))


if __name__ == "__main__":
    main()
