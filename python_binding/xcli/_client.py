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

import os
import re
import functools
import traceback

from xcli._common import (error, info, uri_parse, XcliError, ErrorNumber,
                          ConfigurationError, ProbeError, ExecutionError,
                          ValidationError)
from xcli._common import return_requires as _return_requires
from xcli._data import (Configuration, Host, Volume, Mirror, Mapping,
                        MAPPING_LIST_NO_HOST, FIELD_SEP, split_fields)
from xcli._exec import cmd_exec


def _handle_errors(method):
    @functools.wraps(method)
    def _wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except XcliError:
            raise
        except Exception as common_error:
            stack_trace = traceback.format_exc()
            error("Unexpected exception:\n" + stack_trace)
            raise XcliError(
                ErrorNumber.LIB_BUG,
                "Got unexpected error %s" % common_error, stack_trace)

    return _wrapper


def validate(config):
    """
    Check that all connection parameters are set.  Raise ConfigurationError
    if not.
    """
    for name in ('ip_address', 'username', 'password', 'xcli'):
        value = getattr(config, name)
        if not value or not isinstance(value, str):
            raise ConfigurationError("%s not defined" % name)


def _check_xcli_bin(xcli_bin):
    if not os.path.isfile(xcli_bin) or not os.access(xcli_bin, os.X_OK):
        raise ConfigurationError(
            "xcli binary '%s' does not exist or is not executable" %
            xcli_bin)


# First line of every xcli -s output is the quoted column header,
# e.g. "Name","Size (GB)","Master Name".  Anything after it is ignored.
_HEADER_REGEX = re.compile(r'^(?:"[^"]*"(?:,"[^"]*")*|\*)')


def _field_check(fields):
    return _HEADER_REGEX.match(fields) is not None


def _record_of(record_class, xcli_cmd, line):
    fields = split_fields(line)
    if len(fields) != record_class.FIELD_COUNT:
        raise ValidationError(
            "%s: expecting %d fields, got %d" %
            (xcli_cmd, record_class.FIELD_COUNT, len(fields)), line)
    return record_class._from_fields(fields)


def _mask_password(cmds):
    rc = list(cmds)
    if '-p' in rc:
        rc[rc.index('-p') + 1] = '*****'
    return rc


# Interface to the IBM XIV xcli utility.
#
# Most methods are "native" calls which return the same lines as the xcli
# command of the same name in CSV mode, less the column header line.  The
# xcli binary has to be installed locally.
class Client(object):
    """
    Client of the IBM XIV xcli utility.

        xiv = Client('10.0.0.1', 'admin', 'secret', '/opt/xiv/XIVGUI/xcli')
        for line in xiv.vol_list():
            print(split_fields(line))

    Creating the client runs 'xcli test' once to make sure the binary works.
    Every query runs the binary again; nothing is cached.
    """
    _DEFAULT_BIN_PATHS = [
        "/opt/xiv/XIVGUI/xcli", "/opt/ibm/xcli/xcli", "/usr/bin/xcli",
        "/usr/local/bin/xcli"]

    URI_SCHEME = 'xcli'

    # Without credentials xcli test only complains about the user.
    PROBE_CMD = 'test'
    PROBE_OUTPUT = 'Missing user.'

    @_handle_errors
    def __init__(self, ip_address, username, password, xcli):
        self._config = Configuration(ip_address, username, password, xcli)
        validate(self._config)
        _check_xcli_bin(xcli)
        self._probe()

    # Create a client from an uri like:
    #   xcli://admin@10.0.0.1?xcli=/opt/xiv/XIVGUI/xcli
    # @param    uri         The uri
    # @param    password    xcli password
    # @returns  Client
    @staticmethod
    def from_uri(uri, password):
        """
        Create a Client from an uri of the form
            xcli://<username>@<ip_address>?xcli=<path to xcli>

        When the 'xcli' parameter is missing, the usual install locations are
        searched.
        """
        u = uri_parse(uri, ['scheme', 'host', 'username'])
        if u['scheme'] != Client.URI_SCHEME:
            raise ConfigurationError(
                "Unsupported uri scheme '%s', expecting '%s'" %
                (u['scheme'], Client.URI_SCHEME))

        xcli_bin = u['parameters'].get('xcli')
        if not xcli_bin:
            xcli_bin = Client._find_xcli()

        return Client(u['host'], u['username'], password, xcli_bin)

    @staticmethod
    def _find_xcli():
        """
        Try _DEFAULT_BIN_PATHS
        """
        for cur_path in Client._DEFAULT_BIN_PATHS:
            if os.path.isfile(cur_path) and os.access(cur_path, os.X_OK):
                return cur_path

        raise ConfigurationError(
            "xcli is not installed in any of %s" %
            ", ".join(Client._DEFAULT_BIN_PATHS))

    @property
    def config(self):
        return self._config

    def _probe(self):
        cmds = [self._config.xcli, Client.PROBE_CMD]
        try:
            lines, errno = cmd_exec(cmds, max_lines=1)
        except (OSError, UnicodeDecodeError) as exec_error:
            error("Failed to run xcli probe: %s" % exec_error)
            raise ProbeError(
                "Failed to run '%s': %s" % (" ".join(cmds), exec_error))

        if not lines or lines[0] != Client.PROBE_OUTPUT:
            error("xcli probe got unexpected output: %s" % lines)
            raise ProbeError(
                "'%s' did not reply '%s'" %
                (" ".join(cmds), Client.PROBE_OUTPUT),
                lines[0] if lines else None)

    def _xcli_execute(self, xcli_cmd, xcli_args=None):
        """
        Run xcli in script mode and return its output lines including the
        header line.

        Raise ExecutionError if xcli can not be started, ValidationError if
        it printed nothing.  If the first line does not look like a CSV
        header the output is dropped and an empty list is returned.
        """
        validate(self._config)
        if not xcli_cmd:
            raise XcliError(ErrorNumber.LIB_BUG, "xcli called with no command")

        cmds = [self._config.xcli, '-s',
                '-u', self._config.username,
                '-p', self._config.password,
                '-m', self._config.ip_address,
                xcli_cmd]
        if xcli_args:
            cmds.append(xcli_args)

        info("Executing: ", " ".join(_mask_password(cmds)))
        try:
            lines, errno = cmd_exec(cmds)
        except OSError as os_error:
            error("Failed to start xcli %s: %s" % (xcli_cmd, os_error))
            raise ExecutionError(
                "Couldn't run xcli '%s': %s" % (self._config.xcli, os_error))

        if errno != 0:
            info("xcli %s exited with %d" % (xcli_cmd, errno))

        if not lines:
            raise ValidationError("xcli %s returned no output" % xcli_cmd)

        if not _field_check(lines[0]):
            error("xcli %s: unexpected first line %r, output dropped" %
                  (xcli_cmd, lines[0]))
            return []

        return lines

    # Analogous to xcli host_list.  Each line has the format:
    #   "Name","Type","FC Ports","iSCSI Ports","User Group","Cluster"
    @_handle_errors
    @_return_requires([str])
    def host_list(self):
        """
        Return the lines of xcli host_list without the header line.
        """
        return self._xcli_execute('host_list')[1:]

    # Analogous to xcli vol_list.  Each line has the format:
    #   "Name","Size (GB)","Master Name","Consistency Group","Pool",
    #   "Creator","Used Capacity (GB)"
    @_handle_errors
    @_return_requires([str])
    def vol_list(self):
        """
        Return the lines of xcli vol_list without the header line.
        """
        return self._xcli_execute('vol_list')[1:]

    # Analogous to xcli mirror_list.  Each line has the format:
    #   "Name","Mirror Type","Mirror Object","Role","Remote System",
    #   "Remote Peer","Active","Status","Link Up"
    @_handle_errors
    @_return_requires([str])
    def mirror_list(self):
        """
        Return the lines of xcli mirror_list without the header line, or an
        empty list if the first of them is not CSV.
        """
        mirror_list = self._xcli_execute('mirror_list')[1:]

        if mirror_list and FIELD_SEP in mirror_list[0]:
            return mirror_list

        return []

    # Analogous to xcli mapping_list.  Each line has the format:
    #   "LUN","Volume","Size","Master","Serial Number","Locked"
    # @param    host    Host name to list mappings of
    @_handle_errors
    @_return_requires([str])
    def mapping_list(self, host=None):
        """
        Return the lines of xcli mapping_list host=<host> without the header
        line.

        Without host, MAPPING_LIST_NO_HOST is returned instead of a list and
        xcli is not run.
        """
        if not host:
            return MAPPING_LIST_NO_HOST

        return self._xcli_execute('mapping_list', "host=%s" % host)[1:]

    @_handle_errors
    @_return_requires(dict)
    def fc_connectivity_list(self):
        """
        Return a dict of host WWPN to its FC login state, e.g. 'Yes'.
        """
        rc = {}
        for line in self._xcli_execute('fc_connectivity_list'):
            port = split_fields(line)
            if len(port) < 5:
                info("fc_connectivity_list: skipping line %r" % line)
                continue
            rc[port[1]] = port[4].replace('"', '')

        return rc

    @_handle_errors
    @_return_requires(dict)
    def fc_login_status(self):
        """
        Return a dict of dicts: host name -> {WWPN: login state}.

        Hosts without FC ports are not included.  A WWPN with no entry in
        fc_connectivity_list() has a login state of None.

            for host, ports in sorted(xiv.fc_login_status().items()):
                for wwpn, state in sorted(ports.items()):
                    print("%s %s -> %s" % (host, wwpn, state))
        """
        rc = {}
        fc_connectivity_list = self.fc_connectivity_list()

        for line in self.host_list():
            host = split_fields(line)
            if len(host) < 3:
                continue

            for wwpn in host[2].split(','):
                if wwpn:
                    rc.setdefault(host[0], {})[wwpn] = \
                        fc_connectivity_list.get(wwpn)

        return rc

    @_handle_errors
    @_return_requires([str])
    def connected_hosts(self):
        """
        Return the names of all hosts defined on the array.  This does not
        check whether the host is logged in.
        """
        return [split_fields(line)[0] for line in self.host_list()]

    @_handle_errors
    @_return_requires([Host])
    def hosts(self):
        return [_record_of(Host, 'host_list', l) for l in self.host_list()]

    @_handle_errors
    @_return_requires([Volume])
    def volumes(self):
        return [_record_of(Volume, 'vol_list', l) for l in self.vol_list()]

    @_handle_errors
    @_return_requires([Mirror])
    def mirrors(self):
        return [_record_of(Mirror, 'mirror_list', l)
                for l in self.mirror_list()]

    @_handle_errors
    @_return_requires([Mapping])
    def mappings(self, host):
        if not host:
            raise XcliError(ErrorNumber.INVALID_ARGUMENT,
                            "mappings() requires a host name")

        return [_record_of(Mapping, 'mapping_list', l)
                for l in self.mapping_list(host)]
