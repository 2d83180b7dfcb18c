# src/quill_io/shared_patterns.py
# Keyword tables mapping free text (user instructions, heading titles) to logical résumé sections

from __future__ import annotations

# * Section keywords checked by case-insensitive substring containment
# Declaration order is the tie-break: first section w/ a matching keyword wins
SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "summary": ("summary", "profile", "about", "objective", "professional summary"),
    "experience": ("experience", "work history", "employment", "job", "work experience"),
    "education": ("education", "degree", "university", "college", "school"),
    "skills": ("skills", "technologies", "expertise", "technical skills"),
    "projects": ("projects", "portfolio", "work"),
    "certifications": ("certifications", "certificates", "credentials"),
    "awards": ("awards", "achievements", "honors"),
    "publications": ("publications", "papers", "articles"),
}


# * Infer section name from free text using keyword containment
def infer_section_kind(
    text: str,
    extra_keywords: dict[str, tuple[str, ...]] | None = None,
) -> str | None:
    lowered = text.lower()
    table = {**SECTION_KEYWORDS, **(extra_keywords or {})}
    for kind, keywords in table.items():
        if any(keyword in lowered for keyword in keywords):
            return kind
    return None


__all__ = [
    "SECTION_KEYWORDS",
    "infer_section_kind",
]
