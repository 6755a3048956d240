"""
Resource records, their JSON decoders and the descriptors that drive the generic engine
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .descriptor import ResourceDescriptor
from .error_mapper import RecordDecodeError
from .http_client import Domains


ACCOUNT_BASE = "/2010-04-01/Accounts/{account_sid}"


# --- value converters ---

def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise TypeError(f"expected a scalar, got {type(value).__name__}")
    return str(value)


def _date_time(value: Any) -> datetime:
    """Parse RFC 2822 dates used by the 2010 API, or ISO 8601 used by v1 APIs"""
    text = _string(value)
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return datetime.fromisoformat(text.replace('Z', '+00:00'))


def _integer(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("expected an integer, got bool")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value}")
    return int(value)


def _boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise TypeError(f"expected a boolean, got {value!r}")


def _decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"expected a decimal, got {value!r}")


def _mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected an object, got {type(value).__name__}")
    return dict(value)


def _sequence(value: Any) -> List[Any]:
    if not isinstance(value, list):
        raise TypeError(f"expected an array, got {type(value).__name__}")
    return list(value)


def attribute(convert: Callable[[Any], Any] = _text, required: bool = False,
              key: Optional[str] = None):
    """Declare a record field decoded from the JSON key of the same name, or from key"""
    return field(default=None, metadata={'convert': convert, 'required': required, 'key': key})


class Record:
    """Mixin giving immutable record dataclasses a tolerant JSON decoder"""

    @classmethod
    def from_json(cls, payload: Dict[str, Any]):
        """
        Decode one JSON object, ignoring keys the record does not declare

        Raises:
            RecordDecodeError: If a required field is missing or any field is malformed
        """
        values = {}
        for record_field in fields(cls):
            raw = payload.get(record_field.metadata.get('key') or record_field.name)
            if raw is None:
                if record_field.metadata.get('required'):
                    raise RecordDecodeError(f"{cls.__name__}.{record_field.name} is required")
                values[record_field.name] = None
                continue

            convert = record_field.metadata.get('convert', _text)
            try:
                values[record_field.name] = convert(raw)
            except (TypeError, ValueError, OverflowError) as e:
                raise RecordDecodeError(f"{cls.__name__}.{record_field.name}: {e}") from e

        return cls(**values)


# --- filter enums ---

class ConferenceStatus(Enum):
    INIT = "init"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TranscriptionStatus(Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    FAILED = "failed"


class FeedbackIssue(Enum):
    AUDIO_LATENCY = "audio-latency"
    DIGITS_NOT_CAPTURED = "digits-not-captured"
    DROPPED_CALL = "dropped-call"
    IMPERFECT_AUDIO = "imperfect-audio"
    INCORRECT_CALLER_ID = "incorrect-caller-id"
    ONE_WAY_AUDIO = "one-way-audio"
    POST_DIAL_DELAY = "post-dial-delay"
    UNSOLICITED_CALL = "unsolicited-call"


# --- records ---

@dataclass(frozen=True)
class Conference(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    friendly_name: Optional[str] = attribute()
    status: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class Recording(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    call_sid: Optional[str] = attribute(_string)
    duration: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class Transcription(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    recording_sid: Optional[str] = attribute(_string)
    status: Optional[str] = attribute()
    transcription_text: Optional[str] = attribute()
    type: Optional[str] = attribute()
    duration: Optional[str] = attribute()
    price: Optional[Decimal] = attribute(_decimal)
    price_unit: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class IncomingPhoneNumber(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    phone_number: Optional[str] = attribute()
    friendly_name: Optional[str] = attribute()
    beta: Optional[bool] = attribute(_boolean)
    capabilities: Optional[Dict[str, Any]] = attribute(_mapping)
    address_requirements: Optional[str] = attribute()
    voice_url: Optional[str] = attribute()
    voice_method: Optional[str] = attribute()
    voice_fallback_url: Optional[str] = attribute()
    voice_fallback_method: Optional[str] = attribute()
    voice_application_sid: Optional[str] = attribute()
    voice_caller_id_lookup: Optional[bool] = attribute(_boolean)
    sms_url: Optional[str] = attribute()
    sms_method: Optional[str] = attribute()
    sms_fallback_url: Optional[str] = attribute()
    sms_fallback_method: Optional[str] = attribute()
    sms_application_sid: Optional[str] = attribute()
    status_callback: Optional[str] = attribute()
    status_callback_method: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class SipDomain(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    domain_name: Optional[str] = attribute()
    friendly_name: Optional[str] = attribute()
    auth_type: Optional[str] = attribute()
    voice_url: Optional[str] = attribute()
    voice_method: Optional[str] = attribute()
    voice_fallback_url: Optional[str] = attribute()
    voice_fallback_method: Optional[str] = attribute()
    voice_status_callback_url: Optional[str] = attribute()
    voice_status_callback_method: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class IpAddress(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    ip_access_control_list_sid: Optional[str] = attribute(_string)
    friendly_name: Optional[str] = attribute()
    ip_address: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class CredentialListMapping(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    domain_sid: Optional[str] = attribute(_string)
    friendly_name: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class SmsMessage(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    to: Optional[str] = attribute()
    from_: Optional[str] = attribute(key='from')
    body: Optional[str] = attribute()
    status: Optional[str] = attribute()
    direction: Optional[str] = attribute()
    num_media: Optional[int] = attribute(_integer)
    price: Optional[Decimal] = attribute(_decimal)
    price_unit: Optional[str] = attribute()
    date_sent: Optional[datetime] = attribute(_date_time)
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class Feedback(Record):
    sid: Optional[str] = attribute(_string)
    account_sid: Optional[str] = attribute(_string)
    quality_score: int = attribute(_integer, required=True)
    issues: Optional[List[str]] = attribute(_sequence)
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)


@dataclass(frozen=True)
class Sandbox(Record):
    account_sid: str = attribute(_string, required=True)
    phone_number: Optional[str] = attribute()
    pin: Optional[int] = attribute(_integer)
    application_sid: Optional[str] = attribute()
    voice_url: Optional[str] = attribute()
    voice_method: Optional[str] = attribute()
    sms_url: Optional[str] = attribute()
    sms_method: Optional[str] = attribute()
    status_callback: Optional[str] = attribute()
    status_callback_method: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    api_version: Optional[str] = attribute()
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class AvailablePhoneNumberCountry(Record):
    country_code: str = attribute(_string, required=True)
    country: Optional[str] = attribute()
    beta: Optional[bool] = attribute(_boolean)
    subresource_uris: Optional[Dict[str, Any]] = attribute(_mapping)
    uri: Optional[str] = attribute()


@dataclass(frozen=True)
class PricingCountry(Record):
    iso_country: str = attribute(_string, required=True)
    country: Optional[str] = attribute()
    phone_number_prices: Optional[List[Any]] = attribute(_sequence)
    price_unit: Optional[str] = attribute()
    url: Optional[str] = attribute()


@dataclass(frozen=True)
class TaskQueue(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    workspace_sid: Optional[str] = attribute(_string)
    friendly_name: Optional[str] = attribute()
    target_workers: Optional[str] = attribute()
    max_reserved_workers: Optional[int] = attribute(_integer)
    assignment_activity_sid: Optional[str] = attribute()
    assignment_activity_name: Optional[str] = attribute()
    reservation_activity_sid: Optional[str] = attribute()
    reservation_activity_name: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    date_updated: Optional[datetime] = attribute(_date_time)
    url: Optional[str] = attribute()


@dataclass(frozen=True)
class InProgressConversation(Record):
    sid: str = attribute(_string, required=True)
    account_sid: Optional[str] = attribute(_string)
    friendly_name: Optional[str] = attribute()
    status: Optional[str] = attribute()
    date_created: Optional[datetime] = attribute(_date_time)
    url: Optional[str] = attribute()


# --- descriptors ---

CONFERENCE = ResourceDescriptor(
    name="Conference",
    decoder=Conference.from_json,
    records_key="conferences",
    list_path=ACCOUNT_BASE + "/Conferences.json",
    instance_path=ACCOUNT_BASE + "/Conferences/{sid}.json",
    filters={
        'date_created': "DateCreated",
        'date_updated': "DateUpdated",
        'friendly_name': "FriendlyName",
        'status': "Status",
    },
)

RECORDING = ResourceDescriptor(
    name="Recording",
    decoder=Recording.from_json,
    records_key="recordings",
    list_path=ACCOUNT_BASE + "/Recordings.json",
    instance_path=ACCOUNT_BASE + "/Recordings/{sid}.json",
    filters={'call_sid': "CallSid", 'date_created': "DateCreated"},
)

CALL_RECORDING = ResourceDescriptor(
    name="Recording",
    decoder=Recording.from_json,
    records_key="recordings",
    list_path=ACCOUNT_BASE + "/Calls/{call_sid}/Recordings.json",
    instance_path=ACCOUNT_BASE + "/Calls/{call_sid}/Recordings/{sid}.json",
    filters={'date_created': "DateCreated"},
)

TRANSCRIPTION = ResourceDescriptor(
    name="Transcription",
    decoder=Transcription.from_json,
    records_key="transcriptions",
    list_path=ACCOUNT_BASE + "/Transcriptions.json",
    instance_path=ACCOUNT_BASE + "/Transcriptions/{sid}.json",
)

INCOMING_PHONE_NUMBER = ResourceDescriptor(
    name="IncomingPhoneNumber",
    decoder=IncomingPhoneNumber.from_json,
    records_key="incoming_phone_numbers",
    list_path=ACCOUNT_BASE + "/IncomingPhoneNumbers.json",
    instance_path=ACCOUNT_BASE + "/IncomingPhoneNumbers/{sid}.json",
    filters={
        'beta': "Beta",
        'friendly_name': "FriendlyName",
        'phone_number': "PhoneNumber",
    },
)

SIP_DOMAIN = ResourceDescriptor(
    name="Domain",
    decoder=SipDomain.from_json,
    records_key="domains",
    list_path=ACCOUNT_BASE + "/SIP/Domains.json",
    instance_path=ACCOUNT_BASE + "/SIP/Domains/{sid}.json",
)

IP_ADDRESS = ResourceDescriptor(
    name="IpAddress",
    decoder=IpAddress.from_json,
    records_key="ip_addresses",
    list_path=ACCOUNT_BASE + "/SIP/IpAccessControlLists/{ip_access_control_list_sid}/IpAddresses.json",
    instance_path=ACCOUNT_BASE + "/SIP/IpAccessControlLists/{ip_access_control_list_sid}/IpAddresses/{sid}.json",
)

CREDENTIAL_LIST_MAPPING = ResourceDescriptor(
    name="CredentialListMapping",
    decoder=CredentialListMapping.from_json,
    records_key="credential_list_mappings",
    list_path=ACCOUNT_BASE + "/SIP/Domains/{domain_sid}/CredentialListMappings.json",
    instance_path=ACCOUNT_BASE + "/SIP/Domains/{domain_sid}/CredentialListMappings/{sid}.json",
)

SMS_MESSAGE = ResourceDescriptor(
    name="SmsMessage",
    decoder=SmsMessage.from_json,
    records_key="sms_messages",
    list_path=ACCOUNT_BASE + "/SMS/Messages.json",
    instance_path=ACCOUNT_BASE + "/SMS/Messages/{sid}.json",
    filters={'to': "To", 'from_': "From", 'date_sent': "DateSent"},
)

FEEDBACK = ResourceDescriptor(
    name="Feedback",
    decoder=Feedback.from_json,
    list_path=ACCOUNT_BASE + "/Calls/{call_sid}/Feedback.json",
    instance_path=ACCOUNT_BASE + "/Calls/{call_sid}/Feedback.json",
)

SANDBOX = ResourceDescriptor(
    name="Sandbox",
    decoder=Sandbox.from_json,
    instance_path=ACCOUNT_BASE + "/Sandbox.json",
)

AVAILABLE_PHONE_NUMBER_COUNTRY = ResourceDescriptor(
    name="AvailablePhoneNumberCountry",
    decoder=AvailablePhoneNumberCountry.from_json,
    records_key="countries",
    list_path=ACCOUNT_BASE + "/AvailablePhoneNumbers.json",
    instance_path=ACCOUNT_BASE + "/AvailablePhoneNumbers/{country_code}.json",
)

PRICING_COUNTRY = ResourceDescriptor(
    name="Country",
    decoder=PricingCountry.from_json,
    records_key="countries",
    domain=Domains.PRICING,
    list_path="/v1/PhoneNumbers/Countries",
    instance_path="/v1/PhoneNumbers/Countries/{iso_country}",
)

TASK_QUEUE = ResourceDescriptor(
    name="TaskQueue",
    decoder=TaskQueue.from_json,
    records_key="task_queues",
    domain=Domains.TASKROUTER,
    list_path="/v1/Workspaces/{workspace_sid}/TaskQueues",
    instance_path="/v1/Workspaces/{workspace_sid}/TaskQueues/{sid}",
    filters={
        'friendly_name': "FriendlyName",
        'evaluate_worker_attributes': "EvaluateWorkerAttributes",
    },
)

IN_PROGRESS_CONVERSATION = ResourceDescriptor(
    name="InProgress",
    decoder=InProgressConversation.from_json,
    records_key="conversations",
    domain=Domains.CONVERSATIONS,
    list_path="/v1/Conversations/InProgress",
)
