"""ofcourse - boilerplate-free Concourse resources in Python.

Implement the three methods of ``Resource`` and call the matching entry point
from each of the resource's /opt/resource/check, in and out executables:

    from ofcourse import NameVal, Resource, check

    class MyResource(Resource):
        def check(self, source, version, env, logger):
            return [{"ref": "abc123"}]

        def in_(self, output_dir, source, params, version, env, logger):
            return version, [NameVal(name="ref", value=version["ref"])]

        def out(self, input_dir, source, params, env, logger):
            return {"ref": "def456"}, []

    if __name__ == "__main__":
        check(MyResource())
"""

from ofcourse.constants import VERSION
from ofcourse.dispatch import check, in_, out, run
from ofcourse.environment import Environment
from ofcourse.exceptions import (
    ArgumentError,
    CallbackError,
    DecodeError,
    EncodeError,
    OfcourseError,
    ReadError,
    WriteError,
)
from ofcourse.logging import Logger, LogLevel
from ofcourse.models import (
    CheckInput,
    InInput,
    InOutOutput,
    Metadata,
    NameVal,
    OutInput,
    Params,
    Source,
    Version,
)
from ofcourse.resource import Resource

__version__ = VERSION

__all__ = [
    "ArgumentError",
    "CallbackError",
    "CheckInput",
    "DecodeError",
    "EncodeError",
    "Environment",
    "InInput",
    "InOutOutput",
    "LogLevel",
    "Logger",
    "Metadata",
    "NameVal",
    "OfcourseError",
    "OutInput",
    "Params",
    "ReadError",
    "Resource",
    "Source",
    "Version",
    "WriteError",
    "__version__",
    "check",
    "in_",
    "out",
    "run",
]
