# engineone

Building blocks for a small client/server game engine. It is plain Python and
has no third-party dependencies.

## Modules

### `engineone.vector`

`Vec3(x, y, z)` and `Quat(w, x, y, z)` are frozen dataclasses.

- `Vec3` provides `dot`, `cross`, `+`, `-`, `norm2`, `norm`, `normalized`
  and `rotated(q)`. `normalized` raises `ValueError` for a zero vector.
  `rotated(q)` rotates the vector by a unit quaternion.
- `Quat` provides `hamilton` (also available as `*`), `conjugate`,
  `unit_inverse`, `inverse`, `norm`, `normalized` and a `vector` property.
  `normalized` raises `ValueError` for a zero quaternion. `str(q)` gives
  `quat_t {w, x, y, z}` with each component printed to six decimals.
- The module also has helpers that take and return dictionaries keyed by
  `x`, `y`, `z` (and `w`): `cross_product`, `rotate`, `hamilton_product`,
  `quat_normalize` and `aa_normalize`.
  - A missing key or a non-numeric value raises `TypeError`.
  - `quat_normalize` returns a zero quaternion unchanged.
  - `aa_normalize` normalises only the axis and keeps `w`. It raises
    `ValueError` when the axis has zero length.

### `engineone.text`

Byte-string helpers with C-string semantics. `str` arguments are encoded as
UTF-8.

- `bytes_equal(left, right)` returns `False` when the lengths differ.
  Otherwise it compares the two strings only up to their first NUL byte.
- `copy_bytes(data)` returns a copy that ends before the first NUL byte.
- `concatenate(*args)` joins its arguments into one `bytes` value.

### `engineone.console`

- `History(length)` is a fixed-size list of lines, with the most recent first.
  - `add` puts a line at the front and moves it there if it is already stored.
  - `get(index)` clamps the index, skips back past empty entries, and returns
    `(line, index)`.
  - `resize` changes the length. A length of zero or less becomes 1.
- `Console(names, execute, history_length, out=None)` is a line editor.
  - It is fed one character at a time with `feed`, or a whole string with
    `feed_text`.
  - It handles printable characters, backspace, the left and right arrows,
    history through the up and down arrows, `^C` to discard the line and `^D`
    on an empty line to set `quit`.
  - Tab completes against `names`. Candidates are ranked by how often each
    name has been used, and at most 10 are shown. Pressing tab again cycles
    through them, and Enter accepts the highlighted one.
  - Enter passes the line to `execute` and records it in the history and the
    usage counts.
- `RawTerminal(fd=None)` is a context manager. It puts a terminal (standard
  input by default) into raw, non-blocking mode and restores the original
  settings on exit. `read_char()` returns one pending character or `None`.
  It needs a POSIX TTY.

### `engineone.vfs`

`Vfs` mounts real directories at the root of one virtual namespace and
searches them in mount order.

- `mount` and `unmount` add and remove directories from the search path.
- `exists` checks whether a virtual path is present.
- `read_text` and `read_bytes` read a file. `read_text` stops at the first
  NUL character.
- `set_workspace` sets the workspace and the write directory.
- `load_game(name)` mounts the game directory, and also `workspace/name`
  when a workspace is set. It then collects every `.cfg` and `.lua` file
  under the virtual path `name`, recursively, into a `Mod`. The `Mod` holds
  `name`, a `files` dictionary of path to text, and `filenames`.

Failures raise `VfsError`. Paths that contain `..` are rejected.

### `engineone.clients`

`ClientPool(capacity=2)` keeps track of the client slots on a server.

- `set_port` sets the port. A port below 1024 falls back to 8099.
- `set_max_clients` limits the count to the range `0..capacity`.
- `connect(peer)` takes the lowest free slot. It raises `ServerFullError`
  when the limit has been reached.
- `disconnect(index)` frees a slot.
- `request_disconnect(lua_index)` takes a one-based index and marks that
  client as pending disconnection.
- `active()` yields the clients that are in use and not pending
  disconnection.
- `next_packet_id(index)` returns a per-slot packet counter that wraps at
  2³².

## What it does not do

There is no command to start a server or client, and no networking.
`ClientPool` only does the bookkeeping, and the caller must send and receive
packets itself. The package has no scripting runtime and no configuration
variable system. The scripts that `Vfs.load_game` collects are returned as
text and are not executed. The package does not render anything.

## Example

```python
from engineone.vector import Vec3, Quat

q = Quat(0.7071068, 0.0, 0.0, 0.7071068)   # 90 degrees about z
print(Vec3(1.0, 0.0, 0.0).rotated(q))      # roughly Vec3(x=0.0, y=1.0, z=0.0)
```

## Running the tests

```
pip install -e .[test]
pytest
```