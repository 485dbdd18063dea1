from registry.query.aggregation import Facet
from registry.query.criteria import MILITARY_SEARCH
from registry.rules import with_esso
from registry.services.base import RecordService


class MilitaryService(RecordService):
    """
    Military personnel.

    The ESSO code is never taken from input: it is derived from
    ``esso_year`` and ``esso_letter`` on create and whenever either changes.
    """

    search = MILITARY_SEARCH
    label = "military person"
    plural = "military personnel"
    facets = {
        "rank": Facet("rank", unknown="Άγνωστος"),
        "esso_year": Facet("esso_year", unknown=None),
        "esso_letter": Facet("esso_letter", unknown=None),
        "service_unit": Facet("service_unit", unknown=None),
    }

    def prepare_create(self, values):
        return with_esso(values)

    def prepare_update(self, values, current):
        return with_esso(values, current)
