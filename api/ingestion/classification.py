"""
Controlled-vocabulary classification for raw ClinVar fields.

Each vocabulary is an ordered table of (marker, value) pairs. A raw string is
lowercased and checked against the markers top to bottom; the first marker
contained in it wins. No match means "not classifiable" (None), which callers
treat as a reason to skip the row.

Order matters:
- "likely pathogenic" must precede "pathogenic" (substring of it)
- "likely benign" must precede "benign"
"""

from __future__ import annotations

Rules = tuple[tuple[str, str], ...]

VARIANT_TYPES = ("SNP", "Deletion", "Insertion", "Duplication", "Indel")

CLINICAL_SIGNIFICANCES = (
    "Pathogenic",
    "Likely pathogenic",
    "Benign",
    "Likely benign",
    "Uncertain significance",
)

VARIANT_TYPE_RULES: Rules = (
    ("single nucleotide variant", "SNP"),
    ("deletion", "Deletion"),
    ("insertion", "Insertion"),
    ("duplication", "Duplication"),
    ("indel", "Indel"),
)

SIGNIFICANCE_RULES: Rules = (
    ("likely pathogenic", "Likely pathogenic"),
    ("pathogenic", "Pathogenic"),
    ("likely benign", "Likely benign"),
    ("benign", "Benign"),
    ("uncertain", "Uncertain significance"),
)


def classify(raw: str | None, rules: Rules) -> str | None:
    text = (raw or "").strip().lower()
    if not text:
        return None
    for marker, value in rules:
        if marker in text:
            return value
    return None


def classify_variant_type(raw: str | None) -> str | None:
    """
    "single nucleotide variant" -> "SNP", "Microsatellite" -> None.
    """
    return classify(raw, VARIANT_TYPE_RULES)


def classify_clinical_significance(raw: str | None) -> str | None:
    """
    "Likely pathogenic" -> "Likely pathogenic", "Pathogenic/Likely benign" -> "Pathogenic".
    """
    return classify(raw, SIGNIFICANCE_RULES)
