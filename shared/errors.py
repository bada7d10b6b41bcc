"""Error taxonomy shared by the pipeline and the API layer."""


class ConverterError(Exception):
    """Base class for all scrape-and-convert errors."""


class JobValidationError(ConverterError):
    """Submission rejected before a job is created (bad URL, unknown format)."""


class FetchError(ConverterError):
    """Navigation, timeout or content extraction failure."""


class RenderIOError(ConverterError):
    """The document artifact could not be written."""


class NotFoundError(ConverterError):
    """A job or artifact lookup found nothing."""
