[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matissehal"
version = "0.1.0"
description = "Device support utilities for a Wi-Fi tablet: location-service helpers, lights, touch power, WLAN address and build properties"
requires-python = ">=3.10"
dependencies = []
keywords = ["gps", "sysfs", "embedded", "message-queue", "config", "timer", "backlight"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["matissehal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
