"""Script to run database migrations."""

import sys

from betterauth import migrations
from betterauth.middleware.logging import configure_logging

USAGE = "Usage: python scripts/migrate.py [upgrade [rev] | downgrade [rev] | current | create <message>]"


def main(argv: list[str]) -> int:
    """Dispatch a migration command."""
    configure_logging()
    action = argv[0] if argv else "upgrade"

    try:
        if action == "upgrade":
            migrations.upgrade(argv[1] if len(argv) > 1 else "head")
            print("✓ Migrations applied successfully!")
        elif action == "downgrade":
            migrations.downgrade(argv[1] if len(argv) > 1 else "base")
            print("✓ Migrations reverted successfully!")
        elif action == "current":
            print(migrations.current() or "<base>")
        elif action == "create" and len(argv) > 1:
            migrations.create(" ".join(argv[1:]))
            print("✓ Migration created successfully!")
        else:
            print(USAGE)
            return 2
    except Exception as e:
        print(f"✗ Migration {action} failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
