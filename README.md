# todolist

A library for keeping todo items together with the permissions that decide
who may edit or remove them. Items and permissions are stored in a
relational database through SQLAlchemy.

## Modules

- `todolist.model`: the domain objects.
  - `Todo` holds a `TodoId`, a `TodoTitle`, a due date, a `TodoStatus` and
    some content.
  - The due date is either a `WholeDay` or a `Period`. A `Period` has a
    start time in UTC and a duration.
  - The content is either `MarkdownContent` or `PlainContent`.
  - `TodoStatus` has the values `UNSPECIFIED`, `ACTIVE`, `POSTPONED`,
    `CANCELLED` and `DONE`, with codes 0 to 4.
  - Users are described by `User`, `UserId` and `UserCreatedAt`.
  - A `TodoPermission` links a todo item and a user with a
    `TodoPermissionRole`: `OWNER`, `VIEW` or `EDIT`.
  - `TodoPermission.new_owner`, `new_edit` and `new_view` build the three
    kinds of permission.
  - `TodoPermissionRole.can_edit()` returns true for owners and editors.
- `todolist.convert`: checked conversions between plain values and domain
  values. Each failure raises `ConvertError`.
  - `parse_todo_id` parses a UUID string.
  - `parse_title` rejects an empty title.
  - `parse_status` accepts codes 0 to 4.
  - `todo_id_to_str`, `title_to_str` and `status_to_code` convert the
    other way.
  - `require_due_date` and `require_content` raise `ConvertError` when
    given `None`. Otherwise they apply the conversion function they are
    given.
- `todolist.errors`: the exceptions.
  - `ConvertError`.
  - The `PersistenceError` family: `InvalidStateError`,
    `UnexpectedPersistenceError` and `UnexpectedModelStateError`.
  - The `CentreError` family: `UnexpectedCentreError` and
    `UnauthorizedError`.
  - `centre_error_from_persistence` wraps a storage failure in an
    `UnexpectedCentreError`.
- `todolist.generator`: the sources of timestamps.
  - `TimeGenerator` is the interface.
  - `DefaultTimeGenerator` returns the current UTC time, truncated to
    millisecond precision.
- `todolist.repositories`: the async storage interfaces `TodoRepository`,
  `TodoPermissionRepository` and `AuthRepository`.
- `todolist.permission_centre`: `PermissionCentre` and
  `DefaultPermissionCentre`.
  - They get, upsert and remove permissions.
  - `has_owner` tells whether any permission is held on an item.
  - Storage failures are raised as `UnexpectedCentreError`.
- `todolist.todo_centre`: `TodoCentre` and `DefaultTodoCentre`, which hold
  the rules. See "Rules" below.
- `todolist.schema`: the database tables.
  - `migrate(engine)` creates the `todo` and `todo_permission` tables when
    they are missing. It records each applied migration in a
    `seaql_migrations` table and returns the names it applied.
  - `rollback(engine)` drops the tables, newest first, and returns the
    names it reverted.
- `todolist.entities`: mapping between domain objects and table rows.
  - `todo_to_row` and `todo_from_row` handle todo items.
  - `permission_to_row` and `permission_from_row` handle permissions.
  - A stored row that does not describe a valid object raises
    `InvalidStateError`.
- `todolist.todo_repository` and `todolist.todo_permission_repository`:
  `SqlTodoRepository` and `SqlTodoPermissionRepository`, the SQLAlchemy
  implementations of the repository interfaces.
  - Writes are upserts.
  - Storing a todo item whose id already exists updates every column except
    `created_at`.
  - Storing a permission that already exists updates only its role.
  - SQLAlchemy errors are raised as `UnexpectedPersistenceError`.
  - The methods are coroutines, but the database access inside them is
    blocking.
- `todolist.configuration`: `Configuration` and the run `Mode`.
  - `Configuration` has the sections `Server`, `Postgres`, `Security` and
    `Otel`.
  - `default_configuration(environ)` returns the built-in settings for the
    mode named by `TODOLIST_MODE` (`dev`, `stg` or `prd`). All three modes
    currently share the same settings.
  - If `TODOLIST_MODE` is not set, development mode is used, unless Python
    runs with `-O`; then `RuntimeError` is raised.
  - An unknown mode raises `ValueError`.
  - `load_configuration(environ)` applies `TODOLIST_<SECTION>_<FIELD>`
    overrides on top of the defaults, for example `TODOLIST_SERVER_PORT` or
    `TODOLIST_POSTGRES_ADDRESS`.
  - Names are split on underscores, so fields whose names contain an
    underscore cannot be overridden this way.
- `todolist.modules`: the wiring.
  - `database_url(postgres)` builds a `postgresql://` URL.
  - `RepositoryModule(configuration, engine=None)` creates an engine for
    that URL, or uses the one it is given. It runs the migrations and hands
    out repositories.
  - `CentreModule(configuration, repository_module)` builds the permission
    and todo centres.

## Rules

- `DefaultTodoCentre.upsert(todo, user_id)`:
  - Stores the item when the user holds an owner or edit permission.
  - Raises `UnauthorizedError` when the user holds only a view permission.
  - When the user holds no permission and nobody else does either, the
    item is new. The centre first records the user as its owner, then
    stores the item.
  - When someone else holds a permission, the call is refused with
    `UnauthorizedError`.
- `DefaultTodoCentre.remove(todo_id, user_id)`:
  - Only the owner may remove an item.
  - The item is removed, then its permission.
  - If the permission cannot be removed, the item is stored again and
    `UnexpectedCentreError` is raised.
  - If the item is already gone, the leftover permission is removed and
    `None` is returned.

## Example

```python
import asyncio
import datetime as dt
import uuid

from sqlalchemy import create_engine

from todolist.configuration import load_configuration
from todolist.model import (
    PlainContent, Todo, TodoId, TodoStatus, TodoTitle, UserId, WholeDay,
)
from todolist.modules import CentreModule, RepositoryModule

configuration, mode = load_configuration({})
repositories = RepositoryModule(configuration, engine=create_engine("sqlite://"))
centre = CentreModule(configuration, repositories).todo_centre()

todo = Todo(
    id=TodoId(uuid.uuid4()),
    title=TodoTitle("Water the plants"),
    due_date=WholeDay(dt.date(2030, 1, 1)),
    status=TodoStatus.ACTIVE,
    content=PlainContent("Both balconies."),
)
user = UserId(uuid.uuid4())

asyncio.run(centre.upsert(todo, user))
asyncio.run(centre.remove(todo.id, user))
```

Connecting to PostgreSQL through `database_url` needs a PostgreSQL driver
for SQLAlchemy. This package does not install one; alternatively, pass your
own engine to `RepositoryModule`.

## What the package does not do

- It is a library only. There is no command, no network server and no
  request handling.
- It does not authenticate anyone. `AuthRepository` is an interface with no
  implementation, and callers supply the `UserId` themselves.
- The `Otel` and `Security` sections of the configuration are read and can
  be loaded, but nothing in the package uses them.
- No centre reads or lists todo items. `SqlTodoRepository.get` is available
  for direct use.

## Tests

The test suite uses pytest, pytest-asyncio and hypothesis, all listed in the
`test` extra:

```
pip install -e .[test]
pytest
```