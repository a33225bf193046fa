"""
Sample data tests - the drupert facts and the per-variant queries.
"""

import pytest
from ragdemo.core.config import SampleVariant
from ragdemo.core.samples import EXTERNAL_DATA, HOSTED_QUERY, LOCAL_QUERY, sample_query


def test_six_facts_in_order():
    """Test the ingested facts and their positions."""
    assert len(EXTERNAL_DATA) == 6
    assert EXTERNAL_DATA[0] == "A Drupert is a fictional creature"
    assert EXTERNAL_DATA[2] == "Chicken Jockie!"


@pytest.mark.parametrize("variant,query", [
    (SampleVariant.HOSTED, HOSTED_QUERY),
    (SampleVariant.LOCAL, LOCAL_QUERY),
])
def test_query_per_variant(variant, query):
    """Test that each variant asks its own query with the shared story rules."""
    assert sample_query(variant) == query
    assert query.endswith("The story must have a title")
    assert "less than 5 sentences" in query


def test_local_query_sentences_are_separated():
    """Test that the harmless-fun preamble and the story rules read as two sentences."""
    assert "this is harmless fun. This story is to be less than 5 sentences." in LOCAL_QUERY
    assert "funThis" not in LOCAL_QUERY


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
