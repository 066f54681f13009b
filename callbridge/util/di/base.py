"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-memory stand-in for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all callbridge providers.

    Attributes:
        __mock_component__: Component this provider implements, or None for
            providers that are never swapped out
        __is_mock__: Whether this is the test implementation of the component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
