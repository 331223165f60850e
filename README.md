# brptool

Building blocks for tools that talk to apps through the Bevy Remote Protocol
(BRP). BRP is JSON-RPC over HTTP. The default port is 15702.

## What it does

- Builds JSON-RPC parameter objects.
- Reads streamed responses sent as Server-Sent Events.
- Finds app binaries in a cargo target directory.
- Waits for an app's port to accept connections.
- Splits managed command lists, including `wait:N` pauses.
- Keeps records of detached app sessions in the temp directory.

## Installation

```
pip install brptool
```

The only runtime dependency is `psutil`.

## Modules

### `brptool.constants`

`DEFAULT_REMOTE_PORT` (15702) and `BIN_NAME` (`"brp"`, used in session file names).

### `brptool.params`

`RpcParamsBuilder` builds request parameters with chained calls:

```python
from brptool.params import RpcParamsBuilder

params = (
    RpcParamsBuilder()
    .entity(123)
    .component("bevy_transform::components::transform::Transform")
    .build()
)
# {"entity": 123, "component": "bevy_transform::components::transform::Transform"}
```

Its other methods are `resource`, `path`, `components`, `component_data`,
`component_list`, `parent`, `entities` and `field`. `build` returns a new dict.

### `brptool.sse`

`parse_sse_stream(chunks)` wraps any iterable of byte (or text) chunks and
returns an `SseStream`. Iterating it yields one decoded JSON value per
`data: ` line; other SSE fields, blank lines and an unterminated final line
are ignored. It raises `SseError` on invalid UTF-8, invalid JSON or an error
raised by the underlying iterable.

```python
from brptool.sse import parse_sse_stream

chunks = [b'data: {"a": 1}\n', b'data: {"b"', b': 2}\n']
list(parse_sse_stream(chunks))
# [{'a': 1}, {'b': 2}]
```

### `brptool.jsonutil`

- `parse_json_object` parses text and raises `ValueError` unless it is a JSON object.
- `parse_json_value` parses any JSON value.
- `format_json` and `print_json` produce indented output.
- `parse_entity_arg` reads an unsigned 64-bit entity id from the first argument.

### `brptool.polling`

- `poll_until_ready` (async) retries a check until it stops raising; when time
  runs out it raises `PollTimeoutError`.
- `is_port_available` (async) tells whether a loopback port can be bound.
- `wait_for_port_connectable` (async) waits until a port accepts connections,
  and on timeout says whether the port is free or held by another process.
- `is_connection_error` tells connection failures apart from other errors.

### `brptool.binaries`

`find_workspace_binary(name, target_dir, profile)` finds a built binary under
`<target_dir>/<profile>/`. The profile defaults to `debug`. A name containing a
path separator is taken as a path of its own. It raises `BinaryNotFoundError`
when the binary is missing and `ValueError` for a profile name with a separator.

### `brptool.argsformat`

Formats the table shown when a command is run with required arguments missing:

- `extract_type_and_example` derives a type label and example from help text.
- `format_missing_args_error` returns the message.
- `display_missing_args_error` writes it to standard error.

### `brptool.managed`

- `parse_command_list` splits a comma-separated command list. Commas inside
  JSON objects do not split it.
- `parse_wait_command` returns the seconds of a `wait:N` command, `None` for
  any other command, and raises `ValueError` for a bad `N`.
- `pick_random_available_port` (async) picks a free port between 15703 and 16702.

```python
from brptool.managed import parse_command_list

parse_command_list('list,spawn {"a": 1, "b": 2},wait:2')
# ['list', 'spawn {"a": 1, "b": 2}', 'wait:2']
```

### `brptool.sessions`

Detached sessions are recorded in the temp directory (or a directory you pass):

- a `brp_session_port_<port>.json` file per port;
- a `brp_session_<timestamp>.log` file per session.

The module provides:

- `SessionInfo`, with `to_json` and `from_json`.
- `session_prefix`, `session_info_path` and `session_log_path`.
- `save_session_info`, which writes a record.
- `session_status`, which describes the session on a port and removes a stale record.
- `format_duration`, `is_process_alive` and `kill_process`.
- `cleanup_all_logs`, which removes session files whose process has exited and
  returns the counts of removed, preserved and failed files.

## What the package does not do

There is no command-line program and no HTTP client: the package does not send
requests to an app, does not start or stop app processes itself, and does not
detect which app to run from a cargo project. It supplies the pieces such a
tool is built from.

## Running the tests

```
pip install "brptool[test]"
pytest
```