"""Dataset loading: JSON individual lists and GEDCOM files."""

import json
import logging
from pathlib import Path
from typing import Any

from ged4py import GedcomReader

from pedigree_layout.errors import DatasetFormatError
from pedigree_layout.models import Individual, Sex

logger = logging.getLogger(__name__)

SEX_MAP = {
    "M": Sex.MALE.value,
    "MALE": Sex.MALE.value,
    "F": Sex.FEMALE.value,
    "FEMALE": Sex.FEMALE.value,
    "U": Sex.UNKNOWN.value,
    "UNKNOWN": Sex.UNKNOWN.value,
}

STRING_FIELDS = ("mother", "father", "mztwin", "dztwin", "display_name")
FLAG_FIELDS = ("noparents", "top_level", "proband")


# ============================================================================
# JSON
# ============================================================================


def normalize_sex(value: Any) -> str:
    """Map sex spellings ("M", "male", "f", ...) to "M" / "F" / "U"."""
    if value is None:
        return Sex.UNKNOWN.value
    sex = SEX_MAP.get(str(value).strip().upper())
    if sex is None:
        raise DatasetFormatError(f"Unrecognised sex: {value!r}")
    return sex


def individual_from_record(record: dict[str, Any]) -> Individual:
    """
    Convert one JSON object into an Individual.

    Layout fields are read by name; every other key (conditions, gene tests,
    ages, ...) is kept in ``attributes`` for the drawing layer.
    """
    if not isinstance(record, dict):
        raise DatasetFormatError(f"Individual must be an object, got {type(record).__name__}")
    name = record.get("name")
    if name is None or str(name) == "":
        raise DatasetFormatError(f"Individual without a name: {record!r}")

    kwargs: dict[str, Any] = {"name": str(name), "sex": normalize_sex(record.get("sex"))}
    for key in STRING_FIELDS:
        value = record.get(key)
        # Empty strings mean "not set", as they do in the source datasets
        kwargs[key] = str(value) if value not in (None, "") else None
    for key in FLAG_FIELDS:
        kwargs[key] = bool(record.get(key, False))

    known = {"name", "sex", *STRING_FIELDS, *FLAG_FIELDS}
    kwargs["attributes"] = {k: v for k, v in record.items() if k not in known}
    return Individual(**kwargs)


def individuals_from_records(records: list[dict[str, Any]]) -> list[Individual]:
    return [individual_from_record(r) for r in records]


def load_json_dataset(path: Path) -> list[Individual]:
    """
    Load a JSON dataset: either a list of individuals or an object with the
    list under ``dataset`` (or ``individuals``).
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DatasetFormatError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("dataset", data.get("individuals"))
    if not isinstance(data, list):
        raise DatasetFormatError(f"{path} does not contain a list of individuals")
    return individuals_from_records(data)


# ============================================================================
# GEDCOM
# ============================================================================


def xref_to_name(xref_id: str) -> str:
    """'@I123@' -> 'I123'."""
    return xref_id.strip("@")


def extract_display_name(indi) -> str | None:
    """Extract a printable full name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return None

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        parts = [p for p in name_rec.value if p]
        return " ".join(parts) or None

    # Fallback: string format "Given /Surname/"
    return str(name_rec.value).replace("/", "").strip() or None


def extract_sex(indi) -> str:
    """Extract sex from an individual record; anything but M/F is unknown."""
    sex_rec = indi.sub_tag("SEX")
    value = str(sex_rec.value).strip().upper() if sex_rec and sex_rec.value else ""
    return value if value in (Sex.MALE.value, Sex.FEMALE.value) else Sex.UNKNOWN.value


def load_gedcom(path: Path) -> list[Individual]:
    """
    Read a GEDCOM file into individuals.

    INDI records become individuals named by their xref id (without the @
    signs) in file order. FAM records supply the parent links: HUSB is the
    father and WIFE the mother of every CHIL. A child listed in more than one
    family keeps the first. An ADOP event sets the adoption marker.
    """
    individuals: dict[str, Individual] = {}

    with GedcomReader(str(path)) as reader:
        # First pass: extract all individuals
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            name = xref_to_name(rec.xref_id)
            individuals[name] = Individual(
                name=name,
                sex=extract_sex(rec),
                display_name=extract_display_name(rec),
                noparents=rec.sub_tag("ADOP") is not None,
            )

        # Second pass: parent links from family records
        for rec in reader.records0("FAM"):
            husb = rec.sub_tag("HUSB")
            wife = rec.sub_tag("WIFE")
            father = xref_to_name(husb.xref_id) if husb and husb.xref_id else None
            mother = xref_to_name(wife.xref_id) if wife and wife.xref_id else None

            for child_rec in rec.sub_tags("CHIL"):
                if not child_rec.xref_id:
                    continue
                child = individuals.get(xref_to_name(child_rec.xref_id))
                if child is None:
                    continue
                if child.mother is not None or child.father is not None:
                    logger.debug("%s belongs to several families, keeping the first", child.name)
                    continue
                child.mother = mother
                child.father = father

    logger.debug("Loaded %d individuals from %s", len(individuals), path)
    return list(individuals.values())


def load_dataset(path: Path | str) -> list[Individual]:
    """Load individuals from a .json or .ged file."""
    path = Path(path)
    if not path.exists():
        raise DatasetFormatError(f"Dataset file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_json_dataset(path)
    if suffix in (".ged", ".gedcom"):
        return load_gedcom(path)
    raise DatasetFormatError(f"Unsupported dataset format: {path.suffix or path.name}")
