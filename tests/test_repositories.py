import pytest

from todolist.repositories import (
    AuthRepository,
    TodoPermissionRepository,
    TodoRepository,
)


async def _stub(self, *args):
    return None


def _implement(interface, names):
    return type("Implementation", (interface,), {name: _stub for name in names})


@pytest.mark.parametrize(
    "interface", [AuthRepository, TodoPermissionRepository, TodoRepository]
)
def test_interfaces_cannot_be_instantiated(interface):
    with pytest.raises(TypeError):
        interface()


@pytest.mark.parametrize(
    ("interface", "methods"),
    [
        (AuthRepository, {"search"}),
        (
            TodoPermissionRepository,
            {"get", "upsert", "search_permission_by_todo_id", "remove"},
        ),
        (TodoRepository, {"get", "upsert", "remove"}),
    ],
)
def test_abstract_methods(interface, methods):
    assert set(interface.__abstractmethods__) == methods


@pytest.mark.parametrize(
    ("interface", "implemented", "missing"),
    [
        (TodoRepository, {"get", "upsert"}, {"remove"}),
        (
            TodoPermissionRepository,
            {"get", "upsert", "remove"},
            {"search_permission_by_todo_id"},
        ),
        (AuthRepository, set(), {"search"}),
    ],
)
def test_partial_implementation_is_rejected(interface, implemented, missing):
    partial = _implement(interface, implemented)

    with pytest.raises(TypeError):
        partial()

    assert partial.__abstractmethods__ == frozenset(missing)


@pytest.mark.parametrize(
    ("interface", "methods"),
    [
        (AuthRepository, {"search"}),
        (
            TodoPermissionRepository,
            {"get", "upsert", "search_permission_by_todo_id", "remove"},
        ),
        (TodoRepository, {"get", "upsert", "remove"}),
    ],
)
def test_complete_implementation_is_accepted(interface, methods):
    complete = _implement(interface, methods)

    assert complete.__abstractmethods__ == frozenset()
    assert isinstance(complete(), interface)