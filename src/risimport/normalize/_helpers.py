"""Compiled regex patterns shared by the normalizers."""

import re

DOI_URL_PREFIX_RE = re.compile(r"^(?:https?://)?(?:dx\.)?doi\.org/", re.IGNORECASE)
DOI_PREFIX_RE = re.compile(r"^doi:\s*", re.IGNORECASE)
DOI_RE = re.compile(r"^10\.\d{2,}(?:\.\d+)*/\S+$")
WHITESPACE_RE = re.compile(r"\s+")
SUFFIX_RE = re.compile(r"^(Jr\.?|Sr\.?|II|III|IV|V)$", re.IGNORECASE)
