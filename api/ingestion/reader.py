"""
Streaming reader for the tab-delimited variant summary file.

Rows are yielded one at a time; nothing beyond the current line is buffered.
`.gz` files are decompressed on the fly.
"""

from __future__ import annotations

import csv
import gzip
import sys
from pathlib import Path
from typing import IO, Iterator

GENE_SYMBOL = "GeneSymbol"
EXTERNAL_ID = "RS# (dbSNP)"
POSITION = "Name"
TYPE = "Type"
CLINICAL_SIGNIFICANCE = "ClinicalSignificance"
PHENOTYPES = "PhenotypeList"

REQUIRED_COLUMNS = (GENE_SYMBOL, EXTERNAL_ID, POSITION, TYPE, CLINICAL_SIGNIFICANCE, PHENOTYPES)

Row = dict[str, "str | None"]

# PhenotypeList cells can exceed the csv module's 128 KiB default.
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


class IngestionError(RuntimeError):
    """The input file cannot be ingested at all (as opposed to a bad row)."""


def _open_text(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, mode="rt", encoding="utf-8", errors="replace", newline="")
    return path.open(mode="r", encoding="utf-8", errors="replace", newline="")


def _check_header(fieldnames: list[str] | None, path: Path) -> None:
    if not fieldnames:
        raise IngestionError(f"{path} is empty; expected a header row.")
    missing = [name for name in REQUIRED_COLUMNS if name not in fieldnames]
    if missing:
        raise IngestionError(f"{path} header is missing required columns: {missing}")


def iter_rows(path: str | Path) -> Iterator[Row]:
    """
    Yield data rows keyed by header name.

    The header is read and validated before the first row is produced.
    Quoting is disabled: ClinVar cells contain bare double quotes.
    """
    path = Path(path)
    with _open_text(path) as fh:
        reader = csv.DictReader(fh, delimiter="\t", quoting=csv.QUOTE_NONE)
        _check_header(reader.fieldnames, path)
        for row in reader:
            yield row
