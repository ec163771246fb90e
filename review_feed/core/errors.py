"""Error taxonomy for review loading."""


class ReviewFeedError(Exception):
    """Base class for all review feed errors."""


class TransportError(ReviewFeedError):
    """The network or file source could not be reached."""


class NotFoundError(TransportError):
    """The requested page or asset does not exist."""


class DecodeError(ReviewFeedError):
    """A page payload could not be decoded."""


class AssetError(ReviewFeedError):
    """A single photo or avatar could not be fetched or decoded."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url
