# -*- coding: utf-8 -*-

from typing import Any, Callable, Dict, Mapping, Optional, TypeVar, Union

Resolver = Callable[..., Any]
TResolver = TypeVar("TResolver", bound=Resolver)


class ResolverMap:
    """
    Collection of field resolvers defined outside of a schema, keyed by type
    name then field name.

    Resolver maps can be passed as the ``resolvers`` argument of
    :func:`~gqlkit.sdl.build_schema` and merged with :meth:`merge`.

    >>> resolvers = ResolverMap()
    >>> @resolvers.resolver("Query.hello")
    ... def resolve_hello(source, args, context, info):
    ...     return "world"
    >>> resolvers.get("Query", "hello") is resolve_hello
    True
    """

    def __init__(
        self, resolvers: Optional[Mapping[str, Mapping[str, Resolver]]] = None
    ):
        self.resolvers = {}  # type: Dict[str, Dict[str, Resolver]]
        for typename, fields in (resolvers or {}).items():
            for fieldname, resolver in fields.items():
                self.register_resolver(typename, fieldname, resolver)

    def register_resolver(
        self,
        typename: str,
        fieldname: str,
        resolver: Resolver,
        *,
        allow_override: bool = False
    ) -> None:
        """ Add a resolver to the collection.

        Raises:
            ValueError: if the field already has a resolver, unless
                ``allow_override`` is set
        """
        parent = self.resolvers.setdefault(typename, {})

        if fieldname in parent and not allow_override:
            raise ValueError(
                'Field "%s" of type "%s" already has a resolver.'
                % (fieldname, typename)
            )

        parent[fieldname] = resolver

    def resolver(
        self, field: str, *, allow_override: bool = False
    ) -> Callable[[TResolver], TResolver]:
        """
        Decorator version of :meth:`register_resolver`.

        Args:
            field: Field path in the form ``{Typename}.{Fieldname}``.
        """
        try:
            typename, fieldname = field.split(".")
        except ValueError:
            raise ValueError(
                'Invalid field path "%s". Field path must of the form '
                '"{Typename}.{Fieldname}"' % field
            )

        def decorator(func: TResolver) -> TResolver:
            self.register_resolver(
                typename, fieldname, func, allow_override=allow_override
            )
            return func

        return decorator

    def get(self, typename: str, fieldname: str) -> Optional[Resolver]:
        return self.resolvers.get(typename, {}).get(fieldname)

    def merge(self, other: "ResolverMap", *, allow_override: bool = False) -> None:
        """ Add all the resolvers of another map to this one. """
        for typename, fields in other.resolvers.items():
            for fieldname, resolver in fields.items():
                self.register_resolver(
                    typename, fieldname, resolver, allow_override=allow_override
                )


ResolversLike = Union[ResolverMap, Mapping[str, Mapping[str, Resolver]]]


def as_resolver_map(resolvers: Optional[ResolversLike]) -> ResolverMap:
    if isinstance(resolvers, ResolverMap):
        return resolvers
    return ResolverMap(resolvers)
