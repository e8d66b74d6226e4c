# robotiq_gripper

A Python library for driving Robotiq adaptive grippers over a serial
Modbus RTU link.

## Modules

- `robotiq_gripper.crc`: `compute_crc(data)` returns the CRC-16/MODBUS
  checksum of a byte sequence. The high byte of the result is the one sent
  first on the wire.
- `robotiq_gripper.data_utils`: `bytes_to_hex`, `words_to_hex`,
  `to_binary_string`, `get_msb` and `get_lsb`. They format bytes and 16-bit
  words as hex or binary text and split a word into its two bytes. Values
  out of range raise `ValueError`.
- `robotiq_gripper.info`: the dataclasses `HardwareInfo`, `ComponentInfo`
  and `InterfaceInfo`. They describe a gripper's string parameters, its
  joints and their interfaces. `HardwareInfo.parameter(name, default)`
  looks up a single parameter.
- `robotiq_gripper.serial_port`: contains
  - the abstract `Serial` link, with the methods `open`, `is_open`,
    `close`, `read` and `write` and the properties `port`, `baudrate` and
    `timeout`;
  - `DefaultSerial`, a `Serial` backed by a `pyserial` port;
  - `SerialFactory` and `DefaultSerialFactory`, which configure a link from
    a `HardwareInfo`.

  A short read or a short write raises `SerialIOError`.
- `robotiq_gripper.driver`: contains
  - the abstract `Driver` interface;
  - the status enums `ActivationStatus`, `ActionStatus`, `GripperStatus`
    and `ObjectDetectionStatus`;
  - `DefaultDriver`, which builds Modbus frames (`create_read_command`,
    `create_write_command`) and exchanges them over a `Serial`.

  `DefaultDriver` retries an exchange up to 5 times on `SerialIOError` and
  then raises `DriverError`. `update_status` decodes the gripper status
  registers.
- `robotiq_gripper.fake_driver`: `FakeDriver`, an in-memory `Driver` for
  testing without hardware. It reports the last commanded position back as
  the current one.
- `robotiq_gripper.cli`: `CommandLineUtility`, a small argument parser.
  `register_handler(parameter, handler, takes_value=False, mandatory=False)`
  attaches a handler to an option. `parse(argv)` returns `False`, after
  printing the reason to stderr, when it meets an unknown option or when a
  mandatory option is missing. An option that lacks its value is reported,
  but the parse does not fail.

## Serial parameters

`DefaultSerialFactory.create(info)` reads these entries of
`info.hardware_parameters`. All of them are strings.

| Parameter  | Default        | Meaning                                    |
|------------|----------------|--------------------------------------------|
| `COM_port` | `/dev/ttyUSB0` | Serial device                              |
| `baudrate` | `115200`       | Baud rate; a negative value is rejected    |
| `timeout`  | `0.5`          | Timeout in seconds, truncated to whole ms  |

The factory configures the link but does not open it.

## Driver behaviour

- The slave address, speed, force and position are bytes (0..255). Values
  outside that range raise `ValueError`.
- A new `DefaultDriver` uses slave address `0x09`. Its commanded speed and
  force both start at `0x80`.
- `activate()` polls the status every `poll_interval` seconds (default
  `1.0`) for as long as the gripper reports `GripperStatus.IN_PROGRESS`.
- `gripper_is_moving()` and `get_gripper_position()` read the status from
  the gripper each time they are called.

## Example

```python
from robotiq_gripper.crc import compute_crc
from robotiq_gripper.data_utils import bytes_to_hex
from robotiq_gripper.driver import DefaultDriver
from robotiq_gripper.info import HardwareInfo
from robotiq_gripper.serial_port import DefaultSerialFactory

print(hex(compute_crc(b"123456789")))  # 0x374b
print(bytes_to_hex([255, 121, 56]))    # FF 79 38

info = HardwareInfo(hardware_parameters={"COM_port": "/dev/ttyUSB0"})
link = DefaultSerialFactory().create(info)
driver = DefaultDriver(link, slave_address=0x09)
if driver.connect():
    driver.deactivate()
    driver.activate()
    driver.set_speed(0xFF)
    driver.set_gripper_position(0xFF)
    print(driver.get_gripper_position())
    driver.disconnect()
```

To run code without a gripper attached, use `FakeDriver()` in place of
`DefaultDriver`.

## What this package does not do

- It has no factory that chooses between `DefaultDriver` and `FakeDriver`,
  or that sets a driver's address, speed and force from hardware
  parameters. Construct and configure the driver yourself.
- It has no joint-level hardware interface. Nothing maps joint positions
  onto gripper positions or runs the driver from a background thread.
- It has no re-activation controller.
- It installs no command-line program. `CommandLineUtility` is a building
  block for your own scripts.

## Tests

The test suite uses pytest. Install the `test` extra to get it, then run
`pytest`.