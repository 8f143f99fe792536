# region Docstring
"""
clipstore.constants
Shared constants and enumerations for the clipboard record store.
Overview:
- Names the backing SQLite file and table used by the record store.
- Provides the default query and retention tuning values.
- Defines the enumeration of content kinds a record can carry.
Contents:
- Storage:
    - APP_NAME: Directory name used under the platform app-data directory.
    - SQLITE_FILE: Default file name of the SQLite database.
    - RECORD_TABLE: Name of the single table holding records.
- Query / Retention Defaults:
    - DEFAULT_SEARCH_LIMIT: Maximum number of hits returned by a search.
    - DEFAULT_RETENTION_LIMIT: Number of records kept by eviction by default.
    - EVICTION_SLACK: Minimum excess over the retention limit before eviction runs.
- Highlighting:
    - HIGHLIGHT_OPEN / HIGHLIGHT_CLOSE: Delimiters wrapped around search matches.
- Enumerations:
    - DataType: Kinds of content stored in a record (text, image).
Design Notes:
- DataType inherits from both str and enum.Enum, allowing direct string comparison
    with the values stored in the data_type column.
"""
# endregion
# region Imports
import enum
from typing import List

# endregion
# region Constants -- Storage
APP_NAME: str = "clipstore"
SQLITE_FILE: str = "data.sqlite"
RECORD_TABLE: str = "record"

# endregion
# region Constants -- Query / Retention
DEFAULT_SEARCH_LIMIT: int = 300
DEFAULT_RETENTION_LIMIT: int = 1000
# Eviction is skipped until the table outgrows the limit by this many rows,
# so marginal overflow does not trigger a delete on every insert.
EVICTION_SLACK: int = 50

# endregion
# region Constants -- Highlighting
HIGHLIGHT_OPEN: str = "<mark>"
HIGHLIGHT_CLOSE: str = "</mark>"


# endregion
# region Enums
class DataType(str, enum.Enum):
    """Kinds of content a record can hold."""

    TEXT = "text"
    IMAGE = "image"


DATA_TYPE_LIST: List[str] = [dt.value for dt in DataType]
# endregion
