"""Address parsing and validation."""

import logging
from email.headerregistry import Address
from email.utils import parseaddr
from typing import Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email

from mailcompose.exceptions import InvalidAddressError, InvalidAddressListError

logger = logging.getLogger(__name__)


class AddressValidator:
    """
    Turns raw address strings into structured addresses.

    Accepts a bare addr-spec ("jane@bbb.com") or a display form
    ("Jane Doe <jane@bbb.com>"). Only syntax is checked; no DNS
    lookups are made.
    """

    def parse(self, raw: Optional[str], display_name: Optional[str] = None) -> Address:
        """
        Parse and validate a single address.

        Args:
            raw: Address string, optionally with an embedded display name
            display_name: Display name; overrides one embedded in raw

        Returns:
            Validated email.headerregistry.Address

        Raises:
            InvalidAddressError: If raw is None, blank or malformed
        """
        if raw is None or not raw.strip():
            logger.debug("Rejected empty address")
            raise InvalidAddressError()

        embedded_name, addr_spec = parseaddr(raw)
        if not addr_spec:
            logger.debug("Rejected unparsable address %r", raw)
            raise InvalidAddressError()

        try:
            validate_email(addr_spec, check_deliverability=False)
        except EmailNotValidError as e:
            logger.debug("Rejected address %r: %s", raw, e)
            raise InvalidAddressError() from e

        # Local part and domain keep the case they were given in
        username, _, domain = addr_spec.rpartition("@")
        return Address(
            display_name=display_name or embedded_name or "",
            username=username,
            domain=domain,
        )

    def parse_all(self, raws: Optional[Iterable[str]]) -> List[Address]:
        """
        Parse and validate a batch of addresses.

        Args:
            raws: Address strings

        Returns:
            Validated addresses in input order

        Raises:
            InvalidAddressListError: If raws is None or has no elements
            InvalidAddressError: On the first malformed element

        Notes:
            - All-or-nothing: no partial result is ever returned
        """
        if raws is None:
            raise InvalidAddressListError()

        raws = [raws] if isinstance(raws, str) else list(raws)
        if not raws:
            raise InvalidAddressListError()

        return [self.parse(raw) for raw in raws]
