import uuid
from datetime import datetime
from typing import Dict, List, Optional

from boto3.dynamodb.conditions import Key

from chalicelib.constants.substitute_keys import from_db, to_db
from chalicelib.utils import db as utils_db, exceptions
from chalicelib.utils.data import substitute_keys
from chalicelib.utils.logger import logger


class EntityBase:
    """
    One collection of documents in the general table.
    Records share the collection partkey, sortkey is the record id.
    """
    pk = None
    sk = None
    record_type = ''

    # validated only when the field is present in the record
    optional_fields_validation = {}
    # must be present and valid
    required_fields_validation = {}

    table = staticmethod(utils_db.get_gen_table)

    def __init__(self, id_=None, fields: Optional[Dict] = None):
        self.id_: str = id_ or str(uuid.uuid4())
        self.fields: Dict = dict(fields or {})
        self.db_record: Dict = {}

    @classmethod
    def _sortkey(cls, id_) -> str:
        raise NotImplementedError

    @classmethod
    def _key(cls, id_) -> Dict:
        return {'partkey': cls.pk, 'sortkey': cls._sortkey(id_)}

    @classmethod
    def from_request_body(cls, request_body: Dict) -> 'EntityBase':
        """
        New entity from a client document, client ids and storage keys are dropped
        """
        body = dict(request_body)
        substitute_keys(dict_to_process=body, base_keys=to_db)
        return cls(fields=body)

    @classmethod
    def record_to_ui(cls, record: Dict) -> Dict:
        item = dict(record)
        substitute_keys(dict_to_process=item, base_keys=from_db)
        # records seeded without id_ carry the id in the sortkey only
        item.setdefault('_id', record.get('sortkey'))
        return item

    @classmethod
    def list_records(cls, filter_expression=None) -> List[Dict]:
        records = utils_db.query_items_paged(
            Key('partkey').eq(cls.pk),
            filter_expression=filter_expression,
            table=cls.table
        )
        logger.info(f'list_records ::: {cls.record_type=} found {len(records)} records')
        return records

    @classmethod
    def list_ui(cls, filter_expression=None) -> List[Dict]:
        return [cls.record_to_ui(record) for record in cls.list_records(filter_expression)]

    @classmethod
    def get_by_id(cls, id_) -> Optional[Dict]:
        try:
            return utils_db.get_db_item(*cls._key(id_).values(), table=cls.table)
        except exceptions.RecordNotFound:
            return None

    @classmethod
    def count(cls) -> int:
        return utils_db.count_items(Key('partkey').eq(cls.pk), table=cls.table)

    @classmethod
    def delete_by_id(cls, id_) -> Dict:
        deleted_count = utils_db.delete_db_record(cls._key(id_), table=cls.table)
        logger.info(f'delete_by_id ::: {cls.record_type=} {id_=} {deleted_count=}')
        return utils_db.delete_result(deleted_count)

    @classmethod
    def delete_many(cls, ids: List[str]) -> Dict:
        """
        Deletes records one by one, not atomic
        """
        deleted_count = 0
        for id_ in ids:
            deleted_count += utils_db.delete_db_record(cls._key(id_), table=cls.table)
        logger.info(f'delete_many ::: {cls.record_type=} requested={len(ids)} {deleted_count=}')
        return utils_db.delete_result(deleted_count)

    def _to_dict(self) -> Dict:
        return {**self.fields, 'id_': self.id_}

    def _init_db_record(self) -> None:
        """
        New DB record initialization
        :return:
        None
        """
        self.db_record = {
            **self._to_dict(),
            'partkey': self.pk,
            'sortkey': self._sortkey(self.id_),
            'record_type': self.record_type,
            'date_created': datetime.now().isoformat(timespec='seconds')
        }

    @classmethod
    def raise_validation_error(cls, key, value=None):
        message = f'Validation error occurred while validating field={key}, {value=}'
        logger.error(f"raise_validation_error ::: {message}")
        raise exceptions.ValidationException(message)

    def _validate_fields(self) -> None:
        """
        Raise ValidationException in case if a field is not valid
        """
        for key, validator_func in self.required_fields_validation.items():
            if validator_func(self.db_record.get(key)) is False:
                self.raise_validation_error(key, self.db_record.get(key))
        for key, validator_func in self.optional_fields_validation.items():
            if self.db_record.get(key) is not None and validator_func(self.db_record.get(key)) is False:
                self.raise_validation_error(key, self.db_record.get(key))

    def create(self) -> Dict:
        """
        Creates entity db record
        :return:
        insert result with the new record id
        """
        self._init_db_record()
        self._validate_fields()
        utils_db.put_db_record(self.db_record, table=self.table)
        logger.info(f"create ::: {self.record_type=} {self.id_=} successfully created")
        return utils_db.insert_result(self.id_)
