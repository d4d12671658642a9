class CampaignModelingError(Exception):
    """Base class for errors raised by the campaign modeling engine."""


class BenchmarkConfigError(CampaignModelingError):
    """Benchmark tables could not be read, validated or written."""


class NarrativeServiceError(CampaignModelingError):
    """The external narrative/competitor text service failed."""
