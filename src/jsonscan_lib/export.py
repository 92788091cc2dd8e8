import json
from pathlib import Path
from typing import Any, Dict, Iterable, TextIO, Union

import pandas as pd


def write_jsonl(records: Iterable[Dict[str, Any]], dest: Union[str, Path, TextIO]) -> int:
    """Write records as JSON Lines, one compact object per line.

    Parameters
    ----------
    records: Iterable[Dict[str, Any]]
        Objects to write. Consumed lazily, so a generator is written as it
        produces values.
    dest: str | Path | TextIO
        Destination path, or an already open text stream.

    Returns
    -------
    int
        Number of records written.
    """

    if hasattr(dest, "write"):
        return _write_lines(records, dest)
    with open(dest, "w", encoding="utf-8", newline="\n") as f:
        return _write_lines(records, f)


def _write_lines(records: Iterable[Dict[str, Any]], f: TextIO) -> int:
    n = 0
    for r in records:
        f.write(json.dumps(r, ensure_ascii=False) + "\n")
        n += 1
    return n


def write_csv(records: Iterable[Dict[str, Any]], path: Union[str, Path]) -> int:
    """Flatten records into columns and write them as CSV.

    Nested objects become dotted column names (``a.b``) via
    :func:`pandas.json_normalize`. An empty input produces an empty file.

    Returns
    -------
    int
        Number of rows written.
    """

    rows = list(records)
    if not rows:
        Path(path).write_text("", encoding="utf-8")
        return 0
    df = pd.json_normalize(rows)
    df.to_csv(path, index=False, encoding="utf-8")
    return len(df)
