"""
GROQ queries for catalog documents.

The product projection flattens the slug, dereferences the category
relation to its name and resolves the image asset to its URL.
"""

import re

PRODUCT_PROJECTION = """{
  "id": _id,
  name,
  "slug": slug.current,
  price,
  description,
  "category": category->name,
  stock,
  "image": image.asset->url
}"""

_DOCUMENT_TYPE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


def product_query(document_type: str = "product") -> str:
    """Build the catalog query for a document type."""
    if not _DOCUMENT_TYPE.match(document_type):
        raise ValueError(f"Invalid document type: {document_type!r}")
    return f'*[_type == "{document_type}"] {PRODUCT_PROJECTION}'
