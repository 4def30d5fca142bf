# Copyright (C) 2026 python-xcli contributors
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; If not, see <http://www.gnu.org/licenses/>.

import subprocess


def cmd_exec(cmds, max_lines=None):
    """
    Execute provided command and return a tuple of
    (list of STDOUT lines, exit code).

    Line terminators are stripped and the lines keep the order the command
    printed them in.  Bytes that are not valid in the locale encoding are
    kept as surrogate escapes instead of failing the read.  If max_lines is
    set, only the first max_lines lines are kept; the rest of the output is
    still read and dropped.

    STDOUT is always drained and closed and the child is always waited on
    before returning.  OSError is raised when the command can not be
    started.
    """
    lines = []
    cmd_popen = subprocess.Popen(
        cmds, stdout=subprocess.PIPE, universal_newlines=True,
        errors='surrogateescape')
    try:
        for line in cmd_popen.stdout:
            if max_lines is None or len(lines) < max_lines:
                lines.append(line.rstrip('\n'))
    finally:
        cmd_popen.stdout.close()
        errno = cmd_popen.wait()
    return lines, errno
