"""Exceptions raised by the clan wars client."""

from __future__ import annotations


class ClanWarsError(Exception):
    """Base class for every error raised by this package."""


class TransportError(ClanWarsError):
    """The HTTP round trip failed (DNS, connect, read, or error status)."""


class DecodeError(ClanWarsError):
    """The response body is not JSON or lacks a required field or shape."""


class DriftUnknown(ClanWarsError):
    """Server clock drift was queried before any request taught it to us."""


class HeaderUnparsable(ClanWarsError):
    """The ``Date`` response header is not an RFC 2822 timestamp."""
