"""
Test suite for Page and PageMeta deserialization
Following TDD approach with AAA pattern and descriptive naming
"""

import json
import pytest
from telephony_rest.page import Page, PageMeta
from telephony_rest.error_mapper import RecordDecodeError
from telephony_rest.resources import Conference


def identity(payload):
    return payload


class TestPageMeta:
    """Test suite for tolerant pagination metadata parsing"""

    def test_from_json_reads_nested_meta_object(self):
        """
        Test that the nested meta object provides every pagination field
        """
        # Arrange
        body = {
            'conversations': [],
            'meta': {
                'page': 2,
                'page_size': 50,
                'first_page_url': 'https://conversations.twilio.com/v1/Conversations/InProgress?PageSize=50&Page=0',
                'previous_page_url': 'https://conversations.twilio.com/v1/Conversations/InProgress?PageSize=50&Page=1',
                'url': 'https://conversations.twilio.com/v1/Conversations/InProgress?PageSize=50&Page=2',
                'next_page_url': 'https://conversations.twilio.com/v1/Conversations/InProgress?PageSize=50&Page=3',
                'key': 'conversations',
            }
        }

        # Act
        meta = PageMeta.from_json(body)

        # Assert
        assert meta.page == 2
        assert meta.page_size == 50
        assert meta.uri.endswith('Page=2')
        assert meta.first_page_uri.endswith('Page=0')
        assert meta.previous_page_uri.endswith('Page=1')
        assert meta.next_page_uri.endswith('Page=3')
        assert meta.key == 'conversations'

    def test_from_json_reads_legacy_top_level_fields(self):
        """
        Test that top-level pagination fields are read when there is no meta object
        """
        # Arrange
        body = {
            'recordings': [],
            'page': 0,
            'page_size': 2,
            'start': 0,
            'end': 1,
            'uri': '/2010-04-01/Accounts/AC123/Recordings.json?PageSize=2&Page=0',
            'first_page_uri': '/2010-04-01/Accounts/AC123/Recordings.json?PageSize=2&Page=0',
            'previous_page_uri': None,
            'next_page_uri': '/2010-04-01/Accounts/AC123/Recordings.json?PageSize=2&Page=1&PageToken=PARE1',
        }

        # Act
        meta = PageMeta.from_json(body)

        # Assert
        assert meta.start == 0
        assert meta.end == 1
        assert meta.previous_page_uri is None
        assert meta.next_page_uri.endswith('PageToken=PARE1')

    def test_from_json_with_missing_fields_leaves_them_empty(self):
        """
        Test that every pagination field is optional
        """
        # Act
        meta = PageMeta.from_json({'meta': {'page_size': 20}})

        # Assert
        assert meta == PageMeta(page_size=20)
        assert meta.first_page_uri is None
        assert meta.next_page_uri is None

    def test_from_json_treats_empty_next_locator_as_terminal(self):
        """
        Test that an empty string locator means there is no next page
        """
        # Act
        meta = PageMeta.from_json({'meta': {'next_page_url': ''}})

        # Assert
        assert meta.next_page_uri is None


class TestPageDeserialize:
    """Test suite for building a Page from a collection body"""

    def test_deserialize_decodes_records_in_server_order(self):
        """
        Test that records are decoded with the record decoder and keep their order
        """
        # Arrange
        content = json.dumps({
            'conferences': [
                {'sid': 'CF1', 'friendly_name': 'first', 'unknown_field': 'ignored'},
                {'sid': 'CF2', 'friendly_name': 'second'},
            ],
            'meta': {'page': 0, 'page_size': 2, 'next_page_url': 'https://api.twilio.com/next'},
        }).encode()

        # Act
        page = Page.deserialize('conferences', content, Conference.from_json)

        # Assert
        assert [record.sid for record in page.records] == ['CF1', 'CF2']
        assert page.records[0].friendly_name == 'first'
        assert page.next_page_uri == 'https://api.twilio.com/next'
        assert page.is_terminal is False
        assert len(page) == 2

    def test_deserialize_with_empty_records_array_returns_empty_terminal_page(self):
        """
        Test that an empty array is a valid page and keeps its meta
        """
        # Arrange
        content = b'{"conferences": [], "meta": {"page": 0, "page_size": 50, "next_page_url": null}}'

        # Act
        page = Page.deserialize('conferences', content, Conference.from_json)

        # Assert
        assert page.records == ()
        assert page.page_size == 50
        assert page.is_terminal is True

    def test_deserialize_falls_back_to_meta_key_for_records_field(self):
        """
        Test that meta.key names the records array when the expected field is absent
        """
        # Arrange
        content = b'{"items": [{"sid": "X1"}], "meta": {"key": "items"}}'

        # Act
        page = Page.deserialize('conversations', content, identity)

        # Assert
        assert page.records == ({'sid': 'X1'},)

    def test_deserialize_with_missing_records_field_raises_decode_error(self):
        """
        Test that a body without the records field is malformed
        """
        # Act & Assert
        with pytest.raises(RecordDecodeError) as exc_info:
            Page.deserialize('recordings', b'{"meta": {}}', identity)

        assert "no 'recordings' field" in str(exc_info.value)

    @pytest.mark.parametrize('content', [
        b'not json',
        b'[]',
        b'{"recordings": {"sid": "RE1"}}',
        b'{"recordings": ["RE1"]}',
    ])
    def test_deserialize_with_malformed_body_raises_decode_error(self, content):
        """
        Test that unexpected body shapes raise RecordDecodeError
        """
        # Act & Assert
        with pytest.raises(RecordDecodeError):
            Page.deserialize('recordings', content, identity)

    def test_deserialize_propagates_record_decoder_failure(self):
        """
        Test that a malformed mandatory field in one record is not swallowed
        """
        # Arrange
        content = b'{"conferences": [{"sid": 12345}], "meta": {}}'

        # Act & Assert
        with pytest.raises(RecordDecodeError) as exc_info:
            Page.deserialize('conferences', content, Conference.from_json)

        assert "Conference.sid" in str(exc_info.value)

    def test_page_is_immutable(self):
        """
        Test that a Page cannot be modified after construction
        """
        # Arrange
        page = Page.deserialize('conferences', b'{"conferences": []}', identity)

        # Act & Assert
        with pytest.raises(AttributeError):
            page.records = ({'sid': 'CF1'},)
