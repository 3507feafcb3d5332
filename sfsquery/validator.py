"""
Input validation utilities.

This module decides whether an IP address may be sent to StopForumSpam.
Private (RFC1918), reserved, loopback, link-local, multicast and broadcast
addresses are never queried, and IPv6 is only accepted where the selected
transport supports it.
"""

import ipaddress


class IPValidator:
    """Validator for target IP addresses."""

    def is_valid_ip(self, ip_string: str) -> bool:
        """
        Validate if a string represents a valid IP address.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if valid IPv4 or IPv6 address, False otherwise
        """
        try:
            ipaddress.ip_address(ip_string.strip())
            return True
        except (ValueError, AttributeError):
            return False

    def is_ipv4(self, ip_string: str) -> bool:
        """Check if string represents a valid IPv4 address."""
        try:
            ipaddress.IPv4Address(ip_string.strip())
            return True
        except (ValueError, AttributeError):
            return False

    def normalize_ip(self, ip_string: str) -> str:
        """
        Normalize IP address to standard format.

        Args:
            ip_string: String representation of an IP address

        Returns:
            Normalized IP address string

        Raises:
            ValueError: If IP address is invalid
        """
        try:
            ip_obj = ipaddress.ip_address(ip_string.strip())
            return str(ip_obj)
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid IP address: {ip_string}") from e

    def is_public_ip(self, ip_string: str) -> bool:
        """
        Check if IP address is globally routable unicast space.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if public IP address, False otherwise

        Raises:
            ValueError: If IP address is invalid
        """
        try:
            ip_obj = ipaddress.ip_address(ip_string.strip())
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid IP address: {ip_string}") from e

        if isinstance(ip_obj, ipaddress.IPv6Address) and ip_obj.ipv4_mapped:
            # ::ffff:a.b.c.d is reserved space, whatever it maps to
            return False

        return (ip_obj.is_global
                and not ip_obj.is_multicast
                and not ip_obj.is_reserved
                and not ip_obj.is_unspecified)

    def is_queryable(self, ip_string: str, allow_ipv6: bool = True) -> bool:
        """
        Decide whether an address may be looked up.

        Args:
            ip_string: String representation of an IP address
            allow_ipv6: Whether an IPv6 address is considered valid

        Returns:
            True for a well-formed public address of an allowed family
        """
        if not self.is_valid_ip(ip_string):
            return False
        if not allow_ipv6 and not self.is_ipv4(ip_string):
            return False
        return self.is_public_ip(ip_string)


def is_valid(ip_string: str, allow_ipv6: bool = True) -> bool:
    """Module-level shortcut for IPValidator().is_queryable()."""
    return IPValidator().is_queryable(ip_string, allow_ipv6)
