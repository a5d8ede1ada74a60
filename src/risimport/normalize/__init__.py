"""Value normalizers used while decoding RIS records.

- parse_doi: validate and canonicalize DOI strings
- fix_author_last_name_first: rewrite name lists in "Last, First" order
"""

from risimport.normalize.authors import fix_author_last_name_first, split_names
from risimport.normalize.doi import parse_doi

__all__ = [
    "fix_author_last_name_first",
    "parse_doi",
    "split_names",
]
