"""
Corpus loading from CSV datasets.

Rows are validated one at a time; bad rows are skipped. When nothing
valid can be read, a small seed corpus is used so the similarity tier
always has references to compare against.
"""

import csv
import io
from pathlib import Path

import structlog
from pydantic import ValidationError

from myguard.corpus.corpus import LabeledCorpus
from myguard.models.verdict import ReferenceRecord, Verdict

logger = structlog.get_logger(__name__)

TEXT_COLUMN = "contract_text"
LABEL_COLUMN = "label"

SEED_RECORDS: tuple[ReferenceRecord, ...] = (
    ReferenceRecord(
        text="The tenant shall maintain the property in good condition",
        label=Verdict.ALLOWED,
    ),
    ReferenceRecord(
        text="The tenant shall pay a late fee of 20% for each day of delay",
        label=Verdict.NOT_ALLOWED,
    ),
    ReferenceRecord(
        text="Either party may terminate this agreement with 30 days notice",
        label=Verdict.ALLOWED,
    ),
    ReferenceRecord(
        text="The landlord may enter the premises at any time without notice",
        label=Verdict.NOT_ALLOWED,
    ),
    ReferenceRecord(
        text="Rent shall be paid on the first day of each month",
        label=Verdict.ALLOWED,
    ),
)


def seed_corpus() -> LabeledCorpus:
    """Corpus made of the built-in seed records."""
    return LabeledCorpus(SEED_RECORDS)


def parse_records(csv_text: str) -> list[ReferenceRecord]:
    """
    Parse reference records from CSV text with a header row.

    Malformed rows, rows missing text or label, and rows carrying an
    unknown label are skipped. A malformed header raises csv.Error.
    """
    reader = csv.DictReader(io.StringIO(csv_text))
    # Read the header now so its errors propagate to the caller
    reader.fieldnames
    records: list[ReferenceRecord] = []
    skipped = 0

    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            skipped += 1
            logger.warning("corpus_record_skipped", line=reader.line_num, error=str(e))
            continue

        try:
            record = ReferenceRecord(
                text=(row.get(TEXT_COLUMN) or "").strip(),
                label=(row.get(LABEL_COLUMN) or "").strip(),
            )
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "corpus_record_skipped",
                line=reader.line_num,
                errors=e.error_count(),
            )
            continue
        records.append(record)

    logger.info("corpus_records_parsed", valid=len(records), skipped=skipped)
    return records


def load_corpus(path: Path | str | None) -> LabeledCorpus:
    """
    Load the reference corpus from a CSV file.

    Falls back to the seed corpus if the file is missing, unreadable or
    yields no valid records.
    """
    if path is None:
        logger.warning("corpus_path_not_set", fallback="seed")
        return seed_corpus()

    path = Path(path)
    try:
        csv_text = path.read_text(encoding="utf-8")
        records = parse_records(csv_text)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.warning("corpus_load_failed", path=str(path), error=str(e), fallback="seed")
        return seed_corpus()

    if not records:
        logger.warning("corpus_empty", path=str(path), fallback="seed")
        return seed_corpus()

    logger.info("corpus_loaded", path=str(path), records=len(records))
    return LabeledCorpus(records)
