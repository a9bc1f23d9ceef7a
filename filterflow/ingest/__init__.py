"""
Source adapters for filterflow.

This package contains one normalizer per supported upstream API.
The set is closed: `NORMALIZERS` maps every `Source` member to its
normalizer and `get_normalizer` is the only way the rest of the
package selects one.
"""

from typing import Dict, Optional

from ..normalize.schema import Source
from .base import SourceNormalizer
from .souk_adapter import SoukNormalizer
from .vtools_adapter import VToolsNormalizer
from .intercept import fetch_payload, match_source  # noqa: F401

NORMALIZERS: Dict[Source, SourceNormalizer] = {
    Source.VTOOLS: VToolsNormalizer(),
    Source.SOUK: SoukNormalizer(),
}


def get_normalizer(source: Source) -> Optional[SourceNormalizer]:
    return NORMALIZERS.get(source)
