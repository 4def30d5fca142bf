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

from abc import ABCMeta as _ABCMeta
import json

from xcli._common import default_property

# xcli quotes every field and does not escape quotes or commas inside a
# field, so this is the only separator in script mode output.
FIELD_SEP = '","'


def split_fields(line):
    """
    Split one line of xcli CSV output into a list of field values with the
    outer quotes removed, e.g.:
        '"vol1","17","",""'  ->  ['vol1', '17', '', '']
    """
    if line.startswith('"'):
        line = line[1:]
    if line.endswith('"'):
        line = line[:-1]
    return line.split(FIELD_SEP)


def _split_list(value):
    """
    Split a comma separated port list, e.g. FC Ports of host_list.
    """
    return [v for v in value.split(',') if v]


class DataEncoder(json.JSONEncoder):
    """
    Custom json encoder for objects derived form IData
    """

    def default(self, my_class):
        if not isinstance(my_class, IData):
            raise ValueError('incorrect class type:' + str(type(my_class)))
        else:
            return my_class._to_dict()


class IData(object, metaclass=_ABCMeta):
    """
    Base class functionality of serializable
    classes.
    """

    def _to_dict(self):
        """
        Represent the class as a dictionary
        """
        rc = {'class': self.__class__.__name__}

        for (k, v) in list(self.__dict__.items()):
            if isinstance(v, IData):
                rc[k[1:]] = v._to_dict()
            else:
                rc[k[1:]] = v

        return rc

    def to_dict(self):
        """
        Return the record as a dictionary keyed by property name, with the
        class name stored under 'class'.
        """
        return self._to_dict()

    def __str__(self):
        """
        Used for human string representation.
        """
        return str(self._to_dict())

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None


@default_property('ip_address', allow_set=False,
                  doc="Management IP address or host name")
@default_property('username', allow_set=False, doc="xcli user name")
@default_property('password', allow_set=False, doc="xcli password")
@default_property('xcli', allow_set=False, doc="Path to the xcli binary")
class Configuration(IData):
    """
    Connection parameters of a Client.  Read only once created.
    """

    def __init__(self, _ip_address, _username, _password, _xcli):
        self._ip_address = _ip_address
        self._username = _username
        self._password = _password
        self._xcli = _xcli

    def _to_dict(self):
        rc = IData._to_dict(self)
        if rc['password']:
            rc['password'] = '*****'
        return rc


@default_property('name', doc="Host name")
@default_property('type', doc="Host type, e.g. 'default'")
@default_property('fc_ports', doc="List of FC port WWPNs")
@default_property('iscsi_ports', doc="List of iSCSI names")
@default_property('user_group', doc="User group")
@default_property('cluster', doc="Cluster the host belongs to")
class Host(IData):
    """
    Represents a host defined on the array, one line of host_list:
        "Name","Type","FC Ports","iSCSI Ports","User Group","Cluster"
    """
    FIELD_COUNT = 6

    def __init__(self, _name, _type, _fc_ports, _iscsi_ports, _user_group,
                 _cluster):
        self._name = _name
        self._type = _type
        self._fc_ports = _fc_ports
        self._iscsi_ports = _iscsi_ports
        self._user_group = _user_group
        self._cluster = _cluster

    @staticmethod
    def _from_fields(fields):
        return Host(fields[0], fields[1], _split_list(fields[2]),
                    _split_list(fields[3]), fields[4], fields[5])

    def __str__(self):
        return self.name


@default_property('name', doc="Volume name")
@default_property('size_gb', doc="Size (GB)")
@default_property('master_name', doc="Master volume of a snapshot")
@default_property('consistency_group', doc="Consistency group")
@default_property('pool', doc="Storage pool")
@default_property('creator', doc="User who created the volume")
@default_property('used_capacity_gb', doc="Used capacity (GB)")
class Volume(IData):
    """
    Represents a volume, one line of vol_list:
        "Name","Size (GB)","Master Name","Consistency Group","Pool",
        "Creator","Used Capacity (GB)"
    Values are kept as printed by xcli.
    """
    FIELD_COUNT = 7

    def __init__(self, _name, _size_gb, _master_name, _consistency_group,
                 _pool, _creator, _used_capacity_gb):
        self._name = _name
        self._size_gb = _size_gb
        self._master_name = _master_name
        self._consistency_group = _consistency_group
        self._pool = _pool
        self._creator = _creator
        self._used_capacity_gb = _used_capacity_gb

    @staticmethod
    def _from_fields(fields):
        return Volume(*fields)

    def __str__(self):
        return self.name


@default_property('name', doc="Mirror name")
@default_property('mirror_type', doc="sync_best_effort or async_interval")
@default_property('mirror_object', doc="Volume or CG")
@default_property('role', doc="Master or Slave")
@default_property('remote_system', doc="Remote system name")
@default_property('remote_peer', doc="Peer on the remote system")
@default_property('active', doc="yes or no")
@default_property('status', doc="Mirror status")
@default_property('link_up', doc="yes or no")
class Mirror(IData):
    """
    Represents a mirror, one line of mirror_list:
        "Name","Mirror Type","Mirror Object","Role","Remote System",
        "Remote Peer","Active","Status","Link Up"
    """
    FIELD_COUNT = 9

    def __init__(self, _name, _mirror_type, _mirror_object, _role,
                 _remote_system, _remote_peer, _active, _status, _link_up):
        self._name = _name
        self._mirror_type = _mirror_type
        self._mirror_object = _mirror_object
        self._role = _role
        self._remote_system = _remote_system
        self._remote_peer = _remote_peer
        self._active = _active
        self._status = _status
        self._link_up = _link_up

    @staticmethod
    def _from_fields(fields):
        return Mirror(*fields)

    def __str__(self):
        return self.name


@default_property('lun', doc="LUN number")
@default_property('volume', doc="Volume name")
@default_property('size', doc="Volume size")
@default_property('master', doc="Master volume")
@default_property('serial_number', doc="Volume serial number")
@default_property('locked', doc="yes or no")
class Mapping(IData):
    """
    Represents a LUN mapping of a host, one line of mapping_list:
        "LUN","Volume","Size","Master","Serial Number","Locked"
    """
    FIELD_COUNT = 6

    def __init__(self, _lun, _volume, _size, _master, _serial_number,
                 _locked):
        self._lun = _lun
        self._volume = _volume
        self._size = _size
        self._master = _master
        self._serial_number = _serial_number
        self._locked = _locked

    @staticmethod
    def _from_fields(fields):
        return Mapping(*fields)


class MissingHostname(str):
    """
    Returned by Client.mapping_list() instead of a list when no host name
    was given.  It compares equal to its message text.
    """
    pass


MAPPING_LIST_NO_HOST = MissingHostname('mapping_list called without hostname')
