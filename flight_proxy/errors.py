"""
Exception hierarchy for the flight proxy.

Provider errors are recovered by the fallback chain in FlightService.
The remaining errors map directly onto HTTP responses in the app's
error handlers.
"""


class FlightProxyError(Exception):
    """Base class for all flight proxy errors."""


class ProviderError(FlightProxyError):
    """A flight data provider could not produce a snapshot."""


class UpstreamUnavailable(ProviderError):
    """Network failure, timeout or non-2xx status from an external provider."""


class MalformedResponse(UpstreamUnavailable):
    """The provider answered, but the body could not be parsed."""


class FixtureError(ProviderError):
    """The fallback fixture is missing or corrupt (a configuration error)."""


class ServiceUnavailable(FlightProxyError):
    """Both the primary provider and the fallback dataset failed."""


class ValidationError(FlightProxyError):
    """Missing or invalid caller input."""


class RelayFailure(FlightProxyError):
    """The live chat provider failed. Carries no upstream detail."""
