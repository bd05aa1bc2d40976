from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app


class Review(EntityBase):
    """
    Read only, reviews are loaded into the table outside of the API
    """
    pk = keys_structure.reviews_pk
    sk = keys_structure.reviews_sk
    record_type = 'review'

    @classmethod
    def _sortkey(cls, id_) -> str:
        return cls.sk.format(review_id=id_)


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_get_reviews(request) -> Response:
    return Response(status_code=http200, body=Review.list_ui())
