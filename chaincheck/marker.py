"""Runtime side of the marker decorator.

Checked code imports ``required_props`` so the marker is a real name; at
runtime it leaves the function untouched::

    from chaincheck import required_props

    @required_props(services="sqs")
    async def publish(client): ...
"""

from typing import Callable, Optional, TypeVar, Union

F = TypeVar("F", bound=Callable)


def required_props(
    func: Optional[F] = None,
    *,
    services: Union[str, list[str], tuple[str, ...], None] = None,
) -> Union[F, Callable[[F], F]]:
    """Mark a function for static checking. Has no runtime effect."""
    if func is None:
        def decorate(f: F) -> F:
            return f
        return decorate
    return func
