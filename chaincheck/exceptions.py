"""Exceptions raised by chaincheck."""


class ChaincheckError(Exception):
    """Base class for all chaincheck errors."""


class KnowledgeBaseError(ChaincheckError):
    """Knowledge base source could not be parsed."""


class SettingsError(ChaincheckError):
    """Settings file is missing or invalid."""


class AttributeArgumentError(ChaincheckError):
    """Marker decorator was given arguments it does not accept."""


class UnknownServicesError(ChaincheckError):
    """Services named on a unit do not exist in the knowledge base."""

    def __init__(self, services: list[str]):
        self.services = services
        super().__init__(
            "some of the services you specified do not exist in the knowledge base: "
            + ", ".join(services)
        )
