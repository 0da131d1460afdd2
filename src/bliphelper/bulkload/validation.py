import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import HttpUrl, TypeAdapter, ValidationError

# A single DNS label, letters digits and hyphens, not starting or ending with a hyphen
HOST_LABEL_PATTERN = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")

HTTP_URL = TypeAdapter(HttpUrl)


def is_valid_email(address: str) -> bool:
    try:
        validate_email(address, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_email_list(addresses: str) -> bool:
    """ A comma separated list is only valid if every address in it is valid """
    return all(is_valid_email(address.strip()) for address in addresses.split(","))


def is_valid_callback_url(url: str) -> bool:
    """ http or https URL with a valid host name or ip address, ports must be in range """
    if any(character.isspace() for character in url):
        return False
    try:
        parsed_url = HTTP_URL.validate_python(url)
    except ValidationError:
        return False

    host = parsed_url.host or ""
    if host.startswith("["):  # IPv6 literal, already checked by the parser
        return True
    return all(HOST_LABEL_PATTERN.match(label) for label in host.rstrip(".").split("."))


def validate_notifications(success_email: Optional[str] = None,
                           fail_email: Optional[str] = None,
                           success_callback: Optional[str] = None,
                           fail_callback: Optional[str] = None) -> Optional[str]:
    """
    Validate the optional bulk load notification parameters, empty values are skipped.

    Returns a description of the first invalid parameter, or None when all are valid.
    """
    for name, addresses in (("successEmail", success_email), ("failEmail", fail_email)):
        if addresses and not is_valid_email_list(addresses):
            return f"Invalid email address in {name}: {addresses}"

    for name, url in (("successCallback", success_callback), ("failCallback", fail_callback)):
        if url and not is_valid_callback_url(url):
            return f"Invalid callback URL in {name}: {url}"

    return None
