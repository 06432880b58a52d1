"""Line-oriented command protocol driving a Namespace.

One command per line:

    create <path>            -> ok | no
    create_dir <path>        -> ok | no
    read <path>              -> contenuto <data> | no
    write <path> "<data>"    -> ok <byte-length> | no
    delete <path>            -> ok | no
    delete_r <path>          -> ok | no
    find <name>              -> ok <path> (one per match, sorted) | no
    exit                     -> ends the session
"""

import logging
import re
from dataclasses import dataclass

from namespace import Namespace, NamespaceError

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"\s*(\S+)(?:\s+(\S+))?(.*)$", re.DOTALL)


class ProtocolError(Exception):
    """Malformed command line."""
    pass


@dataclass
class Command:
    name: str
    param: str | None = None
    data: str | None = None


def _parse_payload(rest: str) -> str:
    """Extract the quoted payload of a write command."""
    start = rest.find('"')
    if start == -1:
        raise ProtocolError("Missing opening quote")
    end = rest.find('"', start + 1)
    if end == -1:
        raise ProtocolError("Missing closing quote")
    return rest[start + 1:end]


def parse_line(line: str) -> Command | None:
    """Tokenize a command line. Returns None for a blank line.

    Only write carries a payload; any text after the parameter of other
    commands is ignored.
    """
    line = line.rstrip("\r\n")
    m = _LINE_RE.match(line)
    if m is None:
        return None
    name, param, rest = m.groups()
    cmd = Command(name, param)
    if name == "write" and param is not None:
        cmd.data = _parse_payload(rest)
    return cmd


class Session:
    """Executes protocol lines against one Namespace, writing responses to out."""

    def __init__(self, out, namespace: Namespace | None = None):
        self.out = out
        self.namespace = namespace if namespace is not None else Namespace()
        self.handlers = {
            "create": self._create,
            "create_dir": self._create_dir,
            "read": self._read,
            "write": self._write,
            "delete": self._delete,
            "delete_r": self._delete_r,
            "find": self._find,
        }

    def _emit(self, text: str):
        self.out.write(text + "\n")

    def _try(self, fn, cmd: Command):
        """Run a handler. Namespace and protocol errors answer 'no'."""
        try:
            fn(cmd)
        except (NamespaceError, ProtocolError) as e:
            logger.info("%s rejected: %s", cmd.name, e)
            self._emit("no")

    def handle(self, line: str) -> bool:
        """Process one line. Returns False once the session should end."""
        try:
            cmd = parse_line(line)
        except ProtocolError as e:
            logger.warning("Malformed line %r: %s", line, e)
            self._emit("no")
            return True

        if cmd is None:
            return True
        if cmd.name == "exit":
            return False

        handler = self.handlers.get(cmd.name)
        if handler is None:
            logger.warning("Unknown command: %s", cmd.name)
            return True
        self._try(handler, cmd)
        return True

    def run(self, lines) -> int:
        """Process lines until exit or end of input. Returns the exit code."""
        for line in lines:
            if not self.handle(line):
                break
        self.out.flush()
        return 0

    # --- handlers ---

    def _param(self, cmd: Command) -> str:
        if cmd.param is None:
            raise ProtocolError(f"Missing parameter for {cmd.name}")
        return cmd.param

    def _create(self, cmd: Command):
        self.namespace.create(self._param(cmd))
        self._emit("ok")

    def _create_dir(self, cmd: Command):
        self.namespace.create_dir(self._param(cmd))
        self._emit("ok")

    def _read(self, cmd: Command):
        self._emit(f"contenuto {self.namespace.read(self._param(cmd))}")

    def _write(self, cmd: Command):
        size = self.namespace.write(self._param(cmd), cmd.data)
        self._emit(f"ok {size}")

    def _delete(self, cmd: Command):
        self.namespace.delete(self._param(cmd))
        self._emit("ok")

    def _delete_r(self, cmd: Command):
        self.namespace.delete_recursive(self._param(cmd))
        self._emit("ok")

    def _find(self, cmd: Command):
        for path in self.namespace.find(self._param(cmd)):
            self._emit(f"ok {path}")
