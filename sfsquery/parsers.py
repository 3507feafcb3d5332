"""
Response parsers for the StopForumSpam web API and DNSBL.

Both parsers return a dictionary of QueryResult fields to assign. Fields the
payload does not carry are simply absent, so defaults survive.
"""

import json
import math
import logging
import ipaddress
from datetime import datetime, timezone
from typing import Any, Dict

from .exceptions import MalformedResponse, ServiceReportedFailure

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

# The API reports 'lastseen' as GMT wall-clock time without a zone marker
LASTSEEN_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
)

DNSBL_LISTED_OCTET = 127


def _is_empty(value: Any) -> bool:
    """Emptiness as the API uses it: '0' and 0 both mean 'nothing here'."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() in ('', '0')
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def _is_numeric(value: Any) -> bool:
    """Check for a number or a numeric string; booleans do not count."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def parse_lastseen(text: str) -> int:
    """
    Convert the API 'lastseen' string to epoch seconds.

    The service publishes timestamps in GMT, so the parsed wall-clock time is
    always interpreted as UTC.

    Args:
        text: Timestamp such as '2018-04-20 16:20:00'

    Returns:
        Epoch seconds, or 0 if the text cannot be parsed
    """
    text = str(text).strip()
    for fmt in LASTSEEN_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return int(parsed.replace(tzinfo=timezone.utc).timestamp())

    logger.warning(f"Unparsable lastseen timestamp: {text[:50]!r}")
    return 0


def parse_api_response(raw: str) -> Dict[str, Any]:
    """
    Parse a JSON response from the web API.

    Args:
        raw: Response body

    Returns:
        QueryResult fields to assign

    Raises:
        MalformedResponse: If the body is not a JSON object
        ServiceReportedFailure: If the service flags the query as failed
    """
    try:
        answer = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedResponse("Server response could not be decoded from JSON") from e

    if not isinstance(answer, dict):
        raise MalformedResponse("Server response could not be decoded from JSON")

    if _is_empty(answer.get('success')):
        raise ServiceReportedFailure("Server response indicated query failure")

    ip_data = answer.get('ip')
    if not isinstance(ip_data, dict):
        return {}

    fields: Dict[str, Any] = {}

    if not _is_empty(ip_data.get('lastseen')):
        fields['last_seen'] = parse_lastseen(ip_data['lastseen'])

    frequency = ip_data.get('frequency')
    if not _is_empty(frequency) and _is_numeric(frequency):
        fields['frequency'] = int(float(frequency))

    if not _is_empty(ip_data.get('appears')):
        fields['appears'] = True

    confidence = ip_data.get('confidence')
    if not _is_empty(confidence) and _is_numeric(confidence):
        fields['confidence'] = float(confidence)

    country = ip_data.get('country')
    if not _is_empty(country):
        fields['country'] = str(country)

    asn = ip_data.get('asn')
    if not _is_empty(asn) and _is_numeric(asn):
        fields['asn'] = int(float(asn))

    return fields


def build_dnsbl_hostname(ip_address: str, zone: str) -> str:
    """
    Build the DNSBL lookup name for an IPv4 address.

    Args:
        ip_address: Dotted-quad IPv4 address
        zone: DNSBL zone suffix

    Returns:
        Reversed octets followed by the zone, e.g. '7.167.35.188.<zone>'
    """
    octets = ip_address.strip().split('.')
    return '.'.join(reversed(octets)) + '.' + zone


def parse_dnsbl_response(resolved: str, now: int) -> Dict[str, Any]:
    """
    Decode a DNSBL answer of the form 127.F.D.C.

    F is the report frequency (capped at 255), D the number of days since
    the last report and C the confidence. A first octet other than 127 is
    not an answer this parser understands; nothing is populated and no
    error is raised.

    Args:
        resolved: The A record returned for the lookup name
        now: Current epoch seconds, the reference point for D

    Returns:
        QueryResult fields to assign
    """
    try:
        octets = ipaddress.IPv4Address(resolved.strip()).packed
    except (ValueError, AttributeError):
        logger.warning(f"Unrecognized DNSBL answer: {resolved!r}")
        return {}

    if octets[0] != DNSBL_LISTED_OCTET:
        logger.warning(f"Unrecognized DNSBL answer: {resolved!r}")
        return {}

    return {
        'appears': True,
        'frequency': octets[1],
        'last_seen': now - SECONDS_PER_DAY * octets[2],
        'confidence': float(octets[3]),
    }
