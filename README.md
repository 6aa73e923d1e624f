# matissehal

This is a plain Python library of device support utilities for a Wi-Fi tablet. It covers the helpers behind a location service: logging, a list, a blocking message queue, target detection, a configuration reader and timers. It also controls the backlight and button lights and turns touch input on and off. It reads the WLAN MAC address and sets build properties from the bootloader id.

It uses only the standard library.

## Modules

### `matissehal.log_util`

- `LocLogger` filters messages against a debug level.
  - A level of `0xff` is the default and means "not configured". In that case every message passes at its own severity.
  - Levels 1 to 5 act as a threshold. Messages that pass are logged at error severity.
  - `emit(level, message)` logs through the standard `logging` module under the name `matissehal`. It returns the emitted line, or `None` if the message was filtered out.
- `LogLevel` lists the severities: `ERROR`, `WARNING`, `INFO`, `DEBUG` and `VERBOSE`.
- `loc_logger_init(debug, timestamp)` configures the shared logger, and `get_logger()` returns it.
- `get_timestamp(now)` formats `HH:MM:SS.uuuuuu`.

### `matissehal.linked_list`

`LinkedList` is a first-in first-out list.

- `add(data, dealloc=None)` puts an item at the head. Adding `None` raises `ValueError`.
- `remove()` takes the oldest item from the tail. It raises `ListEmptyError` when the list is empty.
- `flush()` empties the list and calls each item's `dealloc` callback.
- `search(equal, key, remove=False)` returns the first item, from the head, for which `equal(key, item)` is true.
  - It returns `None` when nothing matches.
  - It raises `ListEmptyError` on an empty list.
- The list also supports `is_empty()`, `len()` and iteration from newest to oldest.

### `matissehal.msg_q`

`MessageQueue` is a thread-safe queue.

- `receive()` blocks until a message arrives.
- `unblock()` wakes every waiting receiver. After that, `send`, `receive` and `unblock` raise `QueueUnblockedError`.
- `flush()` drops every queued message and calls its release callback.
- `MsgQStatus` holds the numeric status codes.

### `matissehal.loc_target`

- `target_set(gnss, ssc)`, `gnss_type(target)` and `has_ssc(target)` pack and unpack target values.
- `GnssTarget` and `SscType` hold the values that go into a target.
- `TargetDetector(properties, root)` works out the target and remembers it.
  - It reads the `persist.qca1530` and `ro.baseband` properties from a mapping or a callable.
  - It reads the SoC information files below `root`.
  - `is_qca1530()` waits, one second per try, while the property reads `detect`.

### `matissehal.loc_log`

- `name_from_val(table, value)` and `name_from_mask(table, mask)` look up names in `(name, value)` tables.
- `msg_q_status_name(status)` returns names such as `"eMSG_Q_SUCCESS"`.
- `target_name(target)` returns descriptions such as `" GNSS_MDM with SSC"`.
- `succ_fail_string(is_succ)` returns `"successful"` or `"failed"`.
- `loc_get_time(now)` formats local time as `HH:MM:SS.mmm`.

### `matissehal.loc_cfg`

- `read_conf(path, table)` reads `KEY = VALUE` lines into a table of `ConfigParam(name, ParamType.NUMBER | STRING | FLOAT)` entries.
  - Values starting with `0x` are read as hex.
  - The string value `NULL` becomes an empty string.
  - It always looks for `DEBUG_LEVEL` and `TIMESTAMP` as well, and configures the shared logger from them.
  - It returns `False` when the file is missing.
- `parse_line(line)` and `trim_space(text)` are available on their own.

### `matissehal.loc_timer`

`LocTimer(msec, callback, user_data)` is a one-shot timer.

- `start()` starts it.
- After `msec` milliseconds it calls `callback(user_data, errno.ETIMEDOUT)` on a worker thread, unless `stop()` was called first.
- `wait(timeout)` joins the worker thread.
- `loc_timer_start(msec, callback, user_data)` creates and starts a timer in one call.

### `matissehal.lights`

`open_lights(name, panel_file, button_file)` returns a `LightDevice`.

- It accepts the names `backlight`, `buttons`, `battery`, `notifications` and `attention`.
- Any other name raises `ValueError`.

`set_light(color)` behaves differently for each light:

- **Backlight:** writes the brightness from `rgb_to_brightness` to the panel file.
- **Buttons:** writes `1` or `0` to the button file.
- **Other lights:** does nothing.

The files must already exist; `write_int` opens them for writing and raises `OSError` otherwise.

### `matissehal.wcnss`

- `read_wlan_address(path)` reads a MAC address from a text file and returns six bytes.
- `parse_mac(text)` parses `XX:XX:XX:XX:XX:XX`.

### `matissehal.power`

`set_interactive(on, touchkey_path, touchscreen_path)` writes `1` or `0` to the touch key and touchscreen enable files. It returns whether both writes succeeded.

### `matissehal.init_props`

`init_properties(properties, target_platform)` sets the fingerprint, description, model and device properties in a mutable mapping.

- It chooses the values by whether `ro.bootloader` contains `T530`.
- It does this only when `ro.board.platform` matches `target_platform`.
- It returns the properties it set.

## Install

```
pip install .
```

## Examples

```python
from matissehal.msg_q import MessageQueue

q = MessageQueue()
q.send("hello")
assert q.receive() == "hello"
```

```python
from pathlib import Path
from matissehal.lights import open_lights

Path("/tmp/panel").touch()
backlight = open_lights("backlight", panel_file="/tmp/panel", button_file="/tmp/buttons")
backlight.set_light(0xFFFFFF)   # writes "255\n" to /tmp/panel
```

```python
from matissehal.loc_cfg import ConfigParam, ParamType, read_conf

interval = ConfigParam("INTERVAL", ParamType.NUMBER)
if read_conf("gps.conf", [interval]) and interval.is_set:
    print(interval.value)
```

```python
from matissehal.wcnss import parse_mac

assert parse_mac("00:11:22:33:44:55") == bytes([0x00, 0x11, 0x22, 0x33, 0x44, 0x55])
```

## What it does not do

- This is a library only. It has no command-line program and no service that runs on its own.
- It does not include a location engine. The queue, timer, configuration and target helpers are the building blocks, and nothing here produces position fixes.
- It does not read or set system properties itself. `TargetDetector` and `init_properties` work on the mapping or callable you pass in.

## Running the tests

```
pip install .[test]
pytest
```