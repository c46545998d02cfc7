"""Import and export of eGrabber configuration scripts.

eGrabber runs javascript configuration files (`grabber.runScript(path)`),
where a profile looks like:

    var g = grabbers[0];
    g.RemotePort.execute("AcquisitionStop");
    g.InterfacePort.set("LineSelector", "TTLIO12"); // trigger
    g.RemotePort.set("Width", 512);
    g.RemotePort.execute("AcquisitionStart");

Only that subset is understood: handle declarations, `set`/`execute` calls on
a port, and comments. Anything else raises ScriptParseError, since a script
that can't be read completely can't be applied in order.
"""

from __future__ import annotations

import re
from pathlib import Path

import simplejson as json
from loguru import logger

from grabberconf.types import Action, Operation, Port, Profile, ScriptParseError
from grabberconf.util.defaults import DEFAULT_GRABBER_INDEX, SCRIPT_SUFFIX

_DECLARATION = re.compile(
    r"^(?:var|let|const)\s+(?P<name>[A-Za-z_$][\w$]*)\s*=\s*grabbers\s*\[\s*(?P<index>\d+)\s*\]$"
)
_CALL = re.compile(
    r"^(?P<target>[A-Za-z_$][\w$]*|grabbers\s*\[\s*\d+\s*\])\s*\.\s*(?P<port>\w+)"
    r"\s*\.\s*(?P<action>set|execute)\s*\((?P<args>.*)\)$"
)


def _split_statements(line: str, in_comment: bool = False) -> tuple[list[str], bool]:
    """Split a line on `;`, dropping comments and ignoring quoted text.

    `in_comment` says whether the line starts inside a `/* */` block; the
    returned flag says whether it ends inside one.
    """
    statements = []
    current = []
    quote = None
    i = 0
    while i < len(line):
        ch = line[i]
        if in_comment:
            if line.startswith("*/", i):
                in_comment = False
                i += 1
        elif quote:
            current.append(ch)
            if ch == "\\" and i + 1 < len(line):
                current.append(line[i + 1])
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
            current.append(ch)
        elif line.startswith("//", i):
            break
        elif line.startswith("/*", i):
            in_comment = True
            # a comment separates tokens like whitespace
            current.append(" ")
            i += 1
        elif ch == ";":
            statements.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    if quote:
        raise ValueError("unterminated string")
    statements.append("".join(current).strip())
    return [s for s in statements if s], in_comment


def _split_args(args: str) -> list[str]:
    parts = []
    current = []
    quote = None
    escaped = False
    for ch in args:
        if quote:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
            current.append(ch)
        elif ch == ",":
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    tail = "".join(current).strip()
    if tail or parts:
        parts.append(tail)
    return parts


def _parse_literal(token: str):
    if len(token) >= 2 and token[0] == token[-1] == "'":
        # single quoted js string -> json string
        inner = token[1:-1].replace('\\"', '"').replace('"', '\\"')
        token = f'"{inner}"'
    try:
        value = json.loads(token)
    except json.JSONDecodeError:
        try:
            return int(token, 0)
        except ValueError:
            pass
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"unsupported value {token!r}")
    if not isinstance(value, (str, int, float, bool)):
        raise ValueError(f"unsupported value {token!r}")
    return value


def _parse_port(name: str) -> Port:
    try:
        return Port(name)
    except ValueError:
        raise ValueError(
            f"unknown port {name!r}, expected one of {', '.join(p.value for p in Port)}"
        )


def parse_script(text: str, name: str, description: str = "") -> Profile:
    """Read the operations of an eGrabber script into a profile.

    Parameters
    ----------
    text : str
        Script source.
    name : str
        Name for the resulting profile.
    description : str, optional
        Description for the resulting profile.

    Raises
    ------
    ScriptParseError
        On any statement other than a handle declaration or a port call, on a
        call through an undeclared handle, or on a malformed call.
    """
    handles: dict[str, int] = {}
    operations = []
    in_comment = False
    comment_line = 0
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not in_comment:
            comment_line = line_no
        try:
            statements, in_comment = _split_statements(line, in_comment)
        except ValueError as e:
            raise ScriptParseError(str(e), line_no) from e

        for statement in statements:
            match = _DECLARATION.match(statement)
            if match:
                handles[match["name"]] = int(match["index"])
                continue

            match = _CALL.match(statement)
            if not match:
                raise ScriptParseError(f"unsupported statement: {statement}", line_no)

            target = match["target"]
            if not target.startswith("grabbers") and target not in handles:
                raise ScriptParseError(f"undeclared grabber handle: {target}", line_no)

            try:
                port = _parse_port(match["port"])
                args = [_parse_literal(a) for a in _split_args(match["args"])]
            except ValueError as e:
                raise ScriptParseError(str(e), line_no) from e

            action = Action(match["action"])
            if not args or not isinstance(args[0], str):
                raise ScriptParseError(
                    f"{action} needs a feature name as first argument", line_no
                )
            if action is Action.EXECUTE:
                if len(args) != 1:
                    raise ScriptParseError("execute takes one argument", line_no)
                operations.append(Operation.execute(port, args[0]))
            else:
                if len(args) != 2:
                    raise ScriptParseError("set takes two arguments", line_no)
                operations.append(Operation.set(port, args[0], args[1]))

    if in_comment:
        raise ScriptParseError("unterminated block comment", comment_line)

    if len(set(handles.values())) > 1:
        logger.warning(
            "Script '{}' addresses several grabbers ({}); profiles apply to one",
            name,
            sorted(set(handles.values())),
        )
    return Profile(name=name, operations=tuple(operations), description=description)


def render_script(profile: Profile, grabber_index: int = DEFAULT_GRABBER_INDEX) -> str:
    """Write a profile as an eGrabber script."""
    lines = []
    if profile.description:
        lines.append(f"// {profile.description}")
    lines.append(f"var g = grabbers[{grabber_index}];")
    for op in profile.operations:
        if op.action is Action.EXECUTE:
            lines.append(f"g.{op.port}.execute({json.dumps(op.key)});")
        else:
            lines.append(
                f"g.{op.port}.set({json.dumps(op.key)}, {json.dumps(op.value)});"
            )
    return "\n".join(lines) + "\n"


def check_script_path(path: str | Path) -> Path:
    path = Path(path)
    if path.suffix.lower() != SCRIPT_SUFFIX:
        raise ScriptParseError(f"Config path must end with {SCRIPT_SUFFIX}: {path}")
    return path


def load_script(path: str | Path, name: str | None = None) -> Profile:
    """Read an eGrabber script file into a profile named after the file."""
    path = check_script_path(path)
    text = path.read_text(encoding="utf-8")
    profile = parse_script(text, name=name or path.stem)
    logger.debug(f"Read {len(profile)} operations from {path}")
    return profile


def write_script(profile: Profile, path: str | Path) -> Path:
    path = check_script_path(path)
    path.write_text(render_script(profile), encoding="utf-8")
    logger.info(f"Wrote profile '{profile.name}' to {path}")
    return path
