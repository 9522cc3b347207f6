# topmark:header:start
#
#   project      : GeoSniff
#   file         : test_sniffer_properties.py
#   file_relpath : tests/property/test_sniffer_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the JSON sniffers and the vote tally.

Properties:
1) the sniffer never classifies prefixes below the size minimum,
2) classification is total and deterministic on arbitrary text,
3) a single-line FeatureCollection is GeoJSON, never a sequence,
4) EsriJSON documents stay EsriJSON whether compact or pretty-printed,
5) vote resolution does not depend on entry order.
"""

from __future__ import annotations

import io
import random

from hypothesis import given, settings
from hypothesis import strategies as st

from geosniff.archives.voting import VoteTally, break_tie
from geosniff.formats.base import FormatKey
from geosniff.sniffing.classifier import JsonClassifier
from geosniff.sniffing.content import ContentSniffer
from geosniff.sniffing.structure import probe_structure
from geosniff.sniffing.types import JsonContentClass
from tests.strategies_geosniff import s_esri_document, s_feature_collection_line, s_votes


@given(text=st.text(max_size=170))
def test_short_prefixes_are_unknown(text: str) -> None:
    """Anything under 512 UTF-8 bytes is left undecided by the sniffer."""
    # 170 code points encode to at most 680 bytes; filter to the short ones
    if len(text.encode("utf-8")) < 512:
        assert ContentSniffer().classify(text) is JsonContentClass.UNKNOWN


@settings(max_examples=60)
@given(text=st.text(max_size=2000))
def test_classification_is_total_and_deterministic(text: str) -> None:
    """Arbitrary input never raises and always yields the same class."""
    classifier = JsonClassifier()
    first = classifier.classify_stream(io.BytesIO(text.encode("utf-8")))
    second = classifier.classify_stream(io.BytesIO(text.encode("utf-8")))
    assert first == second
    assert isinstance(first[0], JsonContentClass)
    assert first[1]


@given(text=s_feature_collection_line())
def test_single_line_feature_collection_is_geojson(text: str) -> None:
    """One line is never enough for NDJSON, in either stage."""
    assert "\n" not in text
    assert ContentSniffer().classify(text) is JsonContentClass.GEOJSON
    assert probe_structure(text)[0] is JsonContentClass.GEOJSON


@given(text=s_esri_document())
def test_esri_documents_are_esri(text: str) -> None:
    """Layout does not change the EsriJSON verdict."""
    content, _reason = JsonClassifier().classify_stream(io.BytesIO(text.encode("utf-8")))
    assert content is JsonContentClass.ESRIJSON


@given(votes=s_votes, seed=st.randoms(use_true_random=False))
def test_vote_outcome_is_order_independent(votes: list[FormatKey], seed: random.Random) -> None:
    """Shuffling the entries does not change the winner or the breakdown."""
    shuffled: list[FormatKey] = list(votes)
    seed.shuffle(shuffled)
    a, b = VoteTally(votes), VoteTally(shuffled)
    assert a.breakdown() == b.breakdown()
    assert break_tie(a.leaders()) is break_tie(b.leaders())


@given(votes=s_votes)
def test_leaders_hold_the_maximum(votes: list[FormatKey]) -> None:
    """Every leader has the top count and no other key matches it."""
    tally = VoteTally(votes)
    leaders: list[FormatKey] = tally.leaders()
    top: int = max(votes.count(k) for k in set(votes))
    assert all(tally.count(k) == top for k in leaders)
    assert {k for k in set(votes) if votes.count(k) == top} == set(leaders)
