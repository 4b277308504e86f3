import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from smartcart.config import configure_logging
from smartcart.rag.snapshot_builder import SnapshotBuilder


def main() -> None:
    configure_logging()
    builder = SnapshotBuilder()
    status = builder.status()
    print(
        f"folder_exists={status.folder_exists} json_files={status.json_files} "
        f"snapshot_exists={status.snapshot_exists} examples={status.example_files}"
    )
    result = builder.build()
    print(f"success={result.success} message={result.message}")
    print(
        f"products_written={result.products_written} source_files={result.source_files} "
        f"skipped_records={result.skipped_records}"
    )
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
