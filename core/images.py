"""Image URL helpers: generated avatars, NocoDB attachments and data URIs."""
import base64
import binascii
import re
from typing import Any, Optional, Tuple
from urllib.parse import quote

AVATAR_BASE_URL = 'https://ui-avatars.com/api/'


def avatar_url(name: str, size: int = 300, background: str = '00002c', bold: bool = False) -> str:
    """Build a generated-avatar URL keyed by a display name."""
    url = f"{AVATAR_BASE_URL}?name={quote(name, safe='')}&size={size}&background={background}&color=fff"
    if bold:
        url += '&bold=true&font-size=0.4'
    return url


def founder_avatar_url(name: str) -> str:
    return avatar_url(name, size=80, background='4f46e5')


def company_avatar_url(name: str) -> str:
    return avatar_url(name, size=300, background='00002c', bold=True)


def partner_avatar_url(name: str) -> str:
    return avatar_url(name, size=300, background='4f46e5', bold=True)


def attachment_url(value: Any, base_url: str) -> Optional[str]:
    """Get a servable URL for the first NocoDB attachment in `value`.

    NocoDB returns attachment columns as a list of objects; only the first
    object's ``signedPath`` is used.
    """
    if not isinstance(value, list) or not value:
        return None
    first = value[0]
    if not isinstance(first, dict) or not first.get('signedPath'):
        return None
    return f"{base_url.rstrip('/')}/{first['signedPath'].lstrip('/')}"


def is_data_uri(value: Any) -> bool:
    return isinstance(value, str) and value.startswith('data:image/')


def is_hosted_url(value: Any) -> bool:
    """Check whether a form image field points at an already stored image."""
    return isinstance(value, str) and (value.startswith(('http://', 'https://')) or value.startswith('/'))


def decode_data_uri(value: str) -> Tuple[str, bytes, str]:
    """Decode a base64 image data URI.

    Returns:
        Tuple of (mime_type, content, file_extension)

    Raises:
        ValueError: If the value is not a decodable base64 image
    """
    header, separator, payload = (value or '').partition(',')
    if not header.startswith('data:') or not separator:
        raise ValueError('Not a data URI')
    if not payload:
        raise ValueError('Empty data URI payload')

    mime_type = header[len('data:'):].split(';', 1)[0] or 'image/png'

    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e

    extension = mime_type.split('/', 1)[1].split('+', 1)[0]
    return mime_type, content, extension


def strip_scheme(url: Optional[str]) -> str:
    """Remove a leading http:// or https:// for display."""
    return re.sub(r'^https?://', '', (url or '').strip())
