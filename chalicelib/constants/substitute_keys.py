# key: attribute name, value: new name or None to drop the attribute
to_db = {
    '_id': None,
    'id': None,
    'id_': None,
    'partkey': None,
    'sortkey': None,
    'record_type': None
}

from_db = {
    'partkey': None,
    'sortkey': None,
    'record_type': None,
    'id_': '_id'
}
