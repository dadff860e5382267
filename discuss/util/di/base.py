"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["persistence", "notification"]


class ProviderBase(Provider):
    """Base for every provider.

    Mockable components set ``__mock_component__`` on their base class and
    ``__is_mock__`` on each variant. ``__depends_on__`` names the components
    that must also be real when this one is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[set[Component]] = set()
