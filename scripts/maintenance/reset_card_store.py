"""
Reset the card store database.

DANGEROUS: This deletes all boxes, cards and review history!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_card_store
"""

from brainfood import scheduling


def main():
    print("=" * 60)
    print("WARNING: Reset Card Store")
    print("=" * 60)
    print()
    print("This will DELETE:")
    print("  - All boxes and cards (including scheduling state)")
    print("  - All review logs")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        scheduling.reset_db()
        print("✓ Database reset complete!")
        print("\nThe database now has empty tables ready for new cards.")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
