"""DOI parsing."""

from urllib.parse import unquote

from ._helpers import DOI_PREFIX_RE, DOI_RE, DOI_URL_PREFIX_RE


def parse_doi(value: str | None) -> str | None:
    """Parse a raw string as a DOI.

    Accepts bare DOIs, ``doi:`` prefixed values and ``doi.org`` URLs.
    Case is preserved since DOI suffixes are displayed as registered.

    Parameters
    ----------
    value : str | None
        Raw tag value.

    Returns
    -------
    str | None
        Canonical DOI string (e.g., '10.1000/xyz123'), or None if the
        value is not a DOI.
    """
    if not value:
        return None

    doi = value.strip()

    doi = DOI_URL_PREFIX_RE.sub("", doi)
    doi = DOI_PREFIX_RE.sub("", doi)

    # URL-decode encoded characters (%2F → /, %28 → (, etc.)
    doi = unquote(doi)

    # Strip trailing citation-artifact punctuation only;
    # parentheses/brackets are valid DOI characters (e.g., 10.1002/(sici)1234)
    doi = doi.rstrip(".,;")

    if not DOI_RE.match(doi):
        return None

    return doi
