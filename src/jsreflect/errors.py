from __future__ import annotations


class JSError(Exception):
	"""Base class for errors raised by the object model."""


class JSTypeError(JSError, TypeError):
	"""Equivalent of a JavaScript TypeError."""


class ConversionError(JSTypeError):
	pass


class ValidationError(JSTypeError):
	pass


class ProxyInvariantError(JSTypeError):
	pass


class RevokedProxyError(JSTypeError):
	pass


__all__ = [
	"ConversionError",
	"JSError",
	"JSTypeError",
	"ProxyInvariantError",
	"RevokedProxyError",
	"ValidationError",
]
