"""Entities, their components, and the scene that holds them."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, Union

from .components import TagComponent


class Registry:
    """Stores entities as integer identifiers and at most one component of each type per entity.

    Identifiers of destroyed entities are handed out again, most recent first.
    """

    def __init__(self) -> None:
        self._alive: Dict[int, None] = {}
        self._free: List[int] = []
        self._next = 0
        self._pools: Dict[type, Dict[int, Any]] = {}

    def _check(self, entity: int) -> None:
        if not self.valid(entity):
            raise KeyError(f"invalid entity: {entity}")

    def create(self, hint: Optional[int] = None) -> int:
        """Create an entity, with the identifier ``hint`` when it is free."""
        if hint is not None:
            if hint < 0:
                raise ValueError(f"entity identifier must not be negative: {hint}")
            if hint not in self._alive:
                if hint >= self._next:
                    self._free.extend(range(self._next, hint))
                    self._next = hint + 1
                else:
                    self._free.remove(hint)
                self._alive[hint] = None
                return hint
        if self._free:
            entity = self._free.pop()
        else:
            entity = self._next
            self._next += 1
        self._alive[entity] = None
        return entity

    def destroy(self, entity: int) -> None:
        """Destroy an entity and all its components."""
        self._check(entity)
        for pool in self._pools.values():
            pool.pop(entity, None)
        del self._alive[entity]
        self._free.append(entity)

    def valid(self, entity: Optional[int]) -> bool:
        return entity is not None and entity in self._alive

    def emplace(self, entity: int, component: Any) -> Any:
        """Attach ``component``; the entity must not have one of its type yet."""
        self._check(entity)
        pool = self._pools.setdefault(type(component), {})
        if entity in pool:
            raise ValueError(
                f"entity {entity} already has a {type(component).__name__}"
            )
        pool[entity] = component
        return component

    def replace(self, entity: int, component: Any) -> Any:
        """Swap in ``component`` for the existing one of its type."""
        self._check(entity)
        pool = self._pools.get(type(component), {})
        if entity not in pool:
            raise KeyError(f"entity {entity} has no {type(component).__name__}")
        pool[entity] = component
        return component

    def _component(self, entity: int, component_type: type) -> Any:
        try:
            return self._pools[component_type][entity]
        except KeyError:
            raise KeyError(
                f"entity {entity} has no {component_type.__name__}"
            ) from None

    def get(self, entity: int, *args: type) -> Any:
        """The component of one type, or a tuple of components of several."""
        if not args:
            raise TypeError("get() needs at least one component type")
        self._check(entity)
        found = tuple(self._component(entity, t) for t in args)
        return found[0] if len(found) == 1 else found

    def has(self, entity: int, *args: type) -> bool:
        """Whether the entity has a component of every given type."""
        if not args:
            raise TypeError("has() needs at least one component type")
        self._check(entity)
        return all(entity in self._pools.get(t, {}) for t in args)

    def remove(self, entity: int, component_type: type) -> None:
        self._check(entity)
        pool = self._pools.get(component_type, {})
        if entity not in pool:
            raise KeyError(f"entity {entity} has no {component_type.__name__}")
        del pool[entity]

    def view(self, *args: type) -> Iterator[Tuple[Any, ...]]:
        """Yield ``(entity, component, ...)`` for entities having all given types."""
        if not args:
            raise TypeError("view() needs at least one component type")
        first, *rest = args
        for entity, component in list(self._pools.get(first, {}).items()):
            pools = [self._pools.get(t, {}) for t in rest]
            if all(entity in pool for pool in pools):
                yield (entity, component, *(pool[entity] for pool in pools))

    def entities(self) -> List[int]:
        """Living entities in the order they were created."""
        return list(self._alive)

    def components(self, component_type: type) -> List[Tuple[int, Any]]:
        """``(entity, component)`` pairs for one component type."""
        return list(self._pools.get(component_type, {}).items())

    def clear(self) -> None:
        """Remove every entity and component and start numbering again."""
        self._alive.clear()
        self._free.clear()
        self._next = 0
        self._pools.clear()


class Scene:
    """A set of entities with components, plus time and viewport bookkeeping."""

    def __init__(self) -> None:
        self.registry = Registry()
        self.time = 0.0
        self.viewport_size: Tuple[int, int] = (0, 0)

    def create_entity(self, name: str = "") -> "Entity":
        """Create an entity tagged with ``name``, or ``Entity <id>`` when empty."""
        entity = Entity(self.registry.create(), self)
        entity.emplace(TagComponent(name or f"Entity {entity.handle}"))
        return entity

    def delete_entity(self, entity: Union["Entity", int]) -> None:
        handle = entity.handle if isinstance(entity, Entity) else entity
        self.registry.destroy(handle)

    def view(self, *args: type) -> Iterator[Tuple[Any, ...]]:
        return self.registry.view(*args)

    def on_update(self, dt: float) -> None:
        """Advance the scene clock by ``dt`` seconds."""
        self.time += dt

    def on_viewport_resize(self, width: int, height: int) -> None:
        """Record the size of the viewport the scene is shown in."""
        self.viewport_size = (width, height)


class Entity:
    """A handle to one entity of a scene."""

    __slots__ = ("handle", "scene")

    def __init__(self, handle: Optional[int] = None, scene: Optional[Scene] = None) -> None:
        self.handle = handle
        self.scene = scene

    @property
    def _registry(self) -> Registry:
        if self.scene is None or self.handle is None:
            raise ValueError("entity is not attached to a scene")
        return self.scene.registry

    def emplace(self, component: Any) -> Any:
        """Attach ``component``, replacing one of the same type if present."""
        registry = self._registry
        if registry.has(self.handle, type(component)):
            return registry.replace(self.handle, component)
        return registry.emplace(self.handle, component)

    def add(self, component: Any) -> "Entity":
        """Attach ``component`` unless one of its type is already there."""
        registry = self._registry
        if not registry.has(self.handle, type(component)):
            registry.emplace(self.handle, component)
        return self

    def get(self, component_type: Type[Any]) -> Any:
        return self._registry.get(self.handle, component_type)

    def get_many(self, *args: type) -> Tuple[Any, ...]:
        return tuple(self._registry.get(self.handle, t) for t in args)

    def replace(self, component: Any) -> Any:
        return self._registry.replace(self.handle, component)

    def remove(self, component_type: type) -> None:
        self._registry.remove(self.handle, component_type)

    def has(self, *args: type) -> bool:
        return self._registry.has(self.handle, *args)

    def valid(self) -> bool:
        return self.scene is not None and self.scene.registry.valid(self.handle)

    def __bool__(self) -> bool:
        return self.handle is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self.handle == other.handle
        if isinstance(other, int):
            return self.handle == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.handle)

    def __repr__(self) -> str:
        return f"Entity({self.handle!r})"