import re
import sqlite3
from datetime import datetime, timezone
from hashlib import md5
from pathlib import Path

from clipstore.constants import HIGHLIGHT_CLOSE, HIGHLIGHT_OPEN


# region Content Utilities
# Pure helpers applied to record content.

# Functions:
# - content_hash: Fingerprint a record's content for deduplication.
# - highlight: Mark every occurrence of a search term inside content.


def content_hash(content: str) -> str:
    """
    Calculate the deduplication hash of a record's content.

    Args:
        content (str): The raw record content.

    Returns:
        str: Lower-case hexadecimal MD5 digest of the UTF-8 encoded content.

    Example:
        >>> content_hash("123456")
        'e10adc3949ba59abbe56e057f20f883e'
    """
    return md5(content.encode("utf-8")).hexdigest()


def highlight(
    term: str,
    content: str,
    open_tag: str = HIGHLIGHT_OPEN,
    close_tag: str = HIGHLIGHT_CLOSE,
) -> str:
    """
    Wrap every occurrence of *term* in *content* with the given delimiters.

    Matching folds ASCII letters only, the same way SQLite's LIKE does, so a
    non-ASCII letter matches its own case exactly. The original casing of the
    content is preserved inside the delimiters.

    Args:
        term (str): The search term.
        content (str): The text to annotate.
        open_tag (str): Delimiter placed before each match.
        close_tag (str): Delimiter placed after each match.

    Returns:
        str: The annotated content. An empty term returns content unchanged.

    Example:
        >>> highlight("ab", "abc")
        '<mark>ab</mark>c'
        >>> highlight("AB", "xaby", "[", "]")
        'x[ab]y'
        >>> highlight("\u00e9", "\u00c9 \u00e9")
        '\u00c9 <mark>\u00e9</mark>'
    """
    if not term:
        return content
    pattern = re.compile("".join(_fold_ascii(char) for char in term))
    return pattern.sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", content)


def _fold_ascii(char: str) -> str:
    if char.isascii() and char.isalpha():
        return f"[{char.lower()}{char.upper()}]"
    return re.escape(char)


# endregion
# region Time Utilities


def get_time() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(tz=timezone.utc)


def now_millis() -> int:
    """
    Milliseconds since the Unix epoch for the current moment.

    This is the clock the record store uses for created_at.
    """
    return int(get_time().timestamp() * 1000)


def millis_to_datetime(millis: int) -> datetime:
    """
    Convert a millisecond epoch timestamp to a UTC datetime.

    Example:
        >>> millis_to_datetime(0)
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


# endregion
# region SQLite Utilities


def get_sqlite_tables(path: Path) -> list[str]:
    """
    Retrieve the list of table names from a SQLite database.

    Args:
        path (Path): The file path to the SQLite database.

    Returns:
        list[str]: A list of table names in the database.

    Raises:
        ValueError: If the provided path is not a valid SQLite database file.
    """
    import sqlite_utils

    db = sqlite_utils.Database(path.as_posix())
    try:
        return db.table_names()
    except sqlite3.DatabaseError as e:
        raise ValueError(f"Invalid SQLite database file: {path}") from e
    finally:
        db.close()


def get_table_columns(path: Path, table: str) -> dict[str, str]:
    """
    Retrieve the column names and declared types of a table.

    Args:
        path (Path): The file path to the SQLite database.
        table (str): The table to describe.

    Returns:
        dict[str, str]: Column name to declared SQL type, in table order.

    Raises:
        ValueError: If the table does not exist or the file is not a database.
    """
    import sqlite_utils

    db = sqlite_utils.Database(path.as_posix())
    try:
        if table not in db.table_names():
            raise ValueError(f"Table {table!r} not found in {path}")
        return {col.name: col.type for col in db[table].columns}
    except sqlite3.DatabaseError as e:
        raise ValueError(f"Invalid SQLite database file: {path}") from e
    finally:
        db.close()


# endregion
