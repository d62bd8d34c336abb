"""Provider base class and implementation selection."""

from typing import ClassVar, Literal, Type, TypeVar

from dishka import Provider

Component = Literal["identity", "persistence"]

P = TypeVar("P", bound="ProviderBase")


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with no subclasses is concrete and always used as is.
    A provider class that names a ``__mock_component__`` is a component
    base; its subclasses are the production and mock implementations,
    told apart by ``__is_mock__``.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_component(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls: Type[P], use_mock: bool = False) -> Type[P]:
        """Pick the implementation class to instantiate.

        Raises:
            ValueError: If the component has no implementation of that kind
        """
        if not cls.is_component():
            return cls

        for impl in cls.__subclasses__():
            if impl.__is_mock__ == use_mock:
                return impl

        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {cls.__mock_component__}")
