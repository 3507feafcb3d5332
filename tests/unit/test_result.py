"""
Unit tests for the query result model.
"""

import pytest
from sfsquery.result import QueryResult


class TestQueryResult:
    """Test cases for QueryResult."""

    def test_defaults(self):
        """Test the neutral defaults before any query."""
        result = QueryResult()

        assert result.queried is False
        assert result.succeeded is False
        assert result.raw_response is None
        assert result.appears is False
        assert result.confidence == 0.0
        assert result.frequency == 0
        assert result.last_seen == 0
        assert result.asn == 0
        assert result.country is None
        assert result.error is None

    def test_update_assigns_fields(self):
        """Test that parsed fields are assigned and others keep defaults."""
        result = QueryResult()
        result.update({'appears': True, 'frequency': 12})

        assert result.appears is True
        assert result.frequency == 12
        assert result.country is None

    def test_update_rejects_unknown_field(self):
        """Test that a misspelled field name is an error."""
        with pytest.raises(AttributeError, match="lastseen"):
            QueryResult().update({'lastseen': 1524241200})

    def test_as_dict(self):
        """Test conversion to a plain dictionary."""
        data = QueryResult(queried=True, succeeded=True, country='fr').as_dict()

        assert data['queried'] is True
        assert data['country'] == 'fr'
        assert set(data) == {
            'queried', 'succeeded', 'raw_response', 'appears', 'confidence',
            'frequency', 'last_seen', 'asn', 'country', 'error',
        }
