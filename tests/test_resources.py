"""
Test suite for resource record decoders and descriptors
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from telephony_rest.error_mapper import RecordDecodeError
from telephony_rest.resources import (
    Conference, Transcription, IncomingPhoneNumber, TaskQueue, Sandbox,
    CONFERENCE, SANDBOX
)


class TestRecordDecoding:
    """Test suite for Record.from_json"""

    def test_from_json_parses_rfc2822_dates(self):
        """
        Test that 2010 API dates are decoded to aware datetimes
        """
        # Act
        record = Conference.from_json({
            'sid': 'CF1',
            'date_created': 'Thu, 30 Jul 2015 20:00:00 +0000',
        })

        # Assert
        assert record.date_created == datetime(2015, 7, 30, 20, 0, tzinfo=timezone.utc)

    def test_from_json_parses_iso8601_dates(self):
        """
        Test that v1 API dates are decoded as well
        """
        # Act
        record = TaskQueue.from_json({
            'sid': 'WQ1',
            'date_created': '2015-07-30T20:00:00Z',
            'max_reserved_workers': 5,
        })

        # Assert
        assert record.date_created == datetime(2015, 7, 30, 20, 0, tzinfo=timezone.utc)
        assert record.max_reserved_workers == 5

    def test_from_json_ignores_unknown_fields(self):
        """
        Test that fields the record does not declare are ignored
        """
        # Act
        record = Conference.from_json({'sid': 'CF1', 'region': 'us1', 'subresource_uris': {}})

        # Assert
        assert record == Conference(sid='CF1')

    def test_from_json_keeps_unknown_enum_values_as_text(self):
        """
        Test that a status the client does not know yet still decodes
        """
        # Act
        record = Conference.from_json({'sid': 'CF1', 'status': 'paused'})

        # Assert
        assert record.status == 'paused'

    def test_from_json_decodes_prices_and_booleans(self):
        """
        Test that price and boolean fields use precise types
        """
        # Act
        transcription = Transcription.from_json({'sid': 'TR1', 'price': '-0.05000'})
        number = IncomingPhoneNumber.from_json({'sid': 'PN1', 'beta': False, 'capabilities': {'voice': True}})

        # Assert
        assert transcription.price == Decimal('-0.05000')
        assert number.beta is False
        assert number.capabilities == {'voice': True}

    def test_from_json_with_missing_required_field_raises_decode_error(self):
        """
        Test that a record without its identity is malformed
        """
        # Act & Assert
        with pytest.raises(RecordDecodeError) as exc_info:
            Conference.from_json({'friendly_name': 'no sid'})

        assert "Conference.sid is required" in str(exc_info.value)

    @pytest.mark.parametrize('payload', [
        {'sid': ['CF1']},
        {'sid': 'CF1', 'date_created': 'yesterday'},
        {'sid': 'CF1', 'date_updated': 12345},
    ])
    def test_from_json_with_malformed_field_raises_decode_error(self, payload):
        """
        Test that structurally malformed fields are not swallowed
        """
        # Act & Assert
        with pytest.raises(RecordDecodeError):
            Conference.from_json(payload)

    def test_from_json_with_malformed_integer_raises_decode_error(self):
        """
        Test that integer fields reject non-numeric values
        """
        # Act & Assert
        with pytest.raises(RecordDecodeError):
            Sandbox.from_json({'account_sid': 'AC123', 'pin': 'abc'})

    def test_records_are_immutable(self):
        """
        Test that decoded records cannot be modified
        """
        # Arrange
        record = Conference.from_json({'sid': 'CF1'})

        # Act & Assert
        with pytest.raises(AttributeError):
            record.sid = 'CF2'


class TestDescriptors:
    """Test suite for descriptor helpers"""

    def test_failure_message_uses_operation_verb(self):
        """
        Test that every operation has its fixed connection failure message
        """
        # Act & Assert
        assert CONFERENCE.failure_message('read') == "Conference read failed: Unable to connect to server"
        assert CONFERENCE.failure_message('create') == "Conference creation failed: Unable to connect to server"
        assert CONFERENCE.failure_message('delete') == "Conference delete failed: Unable to connect to server"

    def test_expected_status_defaults_per_operation(self):
        """
        Test the default success status of each operation
        """
        # Act & Assert
        assert CONFERENCE.expected_status('read') == 200
        assert CONFERENCE.expected_status('fetch') == 200
        assert CONFERENCE.expected_status('create') == 201
        assert CONFERENCE.expected_status('update') == 200
        assert CONFERENCE.expected_status('delete') == 204

    def test_render_escapes_path_parameter_values(self):
        """
        Test that identifiers cannot break out of their path segment
        """
        # Act
        path = CONFERENCE.render(CONFERENCE.instance_path, {'account_sid': 'AC123', 'sid': 'CF/1'})

        # Assert
        assert path == '/2010-04-01/Accounts/AC123/Conferences/CF%2F1.json'

    def test_render_without_template_raises_value_error(self):
        """
        Test that unsupported operations are rejected
        """
        # Act & Assert
        with pytest.raises(ValueError) as exc_info:
            SANDBOX.render(SANDBOX.list_path, {'account_sid': 'AC123'})

        assert "Sandbox does not support this operation" in str(exc_info.value)
