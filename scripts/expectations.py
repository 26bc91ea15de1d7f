import enum
import logging
import os
from collections import namedtuple

logger = logging.getLogger(__name__)

class BaselineError(ValueError):
    '''Raised when a baseline log is malformed or does not match the expected paths.'''

class State(enum.Enum):
    SET = "set"
    UNSET = "unset"
    UNSPECIFIED = "unspecified"

# `state` is a `State`, or the assigned value as a string
Assignment = namedtuple("Assignment", ["name", "state"])
Record = namedtuple("Record", ["path", "assignments"])

def parse_state(info):
    try:
        return State(info)
    except ValueError:
        return info

def parse_assignment(line):
    '''Parses one `check-attr` output line of the form `<path>: <attribute>: <info>`.

    Only the separators after the path and the attribute name are split on,
    so values may contain `: ` themselves. The path token is quoted by git when
    it contains special characters and is not used.'''

    tokens = []
    start = 0
    while len(tokens) < 2:
        index = line.find(": ", start)
        if index < 0:
            raise BaselineError(f"invalid line format: {line!r}")
        tokens.append(line[start:index])
        start = index + 2
    tokens.append(line[start:])

    _path, name, info = tokens
    if not name:
        raise BaselineError(f"missing attribute name: {line!r}")
    return Assignment(name, parse_state(info))

def parse_baseline(text):
    '''Yields a `Record` for each path in the baseline `text`.

    A record is the queried path on its own line, followed by one line per
    assignment and terminated by an empty line. A trailing record without
    its empty line is incomplete and ignored.'''

    # the final newline ends the last line, it does not start an empty one
    if text.endswith("\n"):
        text = text[:-1]

    lines = iter(text.split("\n"))
    for path in lines:
        assignments = []
        for line in lines:
            if line == "":
                yield Record(path, assignments)
                break
            assignments.append(parse_assignment(line))
        else:
            if path or assignments:
                logger.debug(f"ignoring incomplete record for `{path}`")
            return

def read_baseline(path):
    '''Reads and parses the baseline log at `path`.'''

    with open(path, encoding='utf-8', newline='') as file:
        return list(parse_baseline(file.read()))

def validate(workspace, paths, baseline_file="baseline"):
    '''Checks that the baseline in `workspace` holds exactly one record per entry of `paths`, in order.
    Returns the parsed records.'''

    baseline_path = os.path.join(workspace, baseline_file)
    logger.info(f"validating `{baseline_path}`")

    records = read_baseline(baseline_path)
    recorded = [record.path for record in records]
    if recorded != list(paths):
        raise BaselineError(f"expected records for {list(paths)}, found {recorded}")

    for record in records:
        logger.debug(f"{record.path!r}: {record.assignments}")

    return records

def lookup(records, path):
    '''Returns a dict mapping attribute names to states for `path` in `records`.'''

    for record in records:
        if record.path == path:
            return {assignment.name: assignment.state for assignment in record.assignments}
    raise KeyError(path)
