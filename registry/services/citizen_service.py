from registry.query.aggregation import Facet, year_of
from registry.query.criteria import CITIZEN_SEARCH
from registry.services.base import RecordService

NO_CONTACT = "Χωρίς επικοινωνία"


class CitizenService(RecordService):
    """Citizens served by the office."""

    search = CITIZEN_SEARCH
    label = "citizen"
    plural = "citizens"
    facets = {
        "municipality": Facet("municipality"),
        "electoral_district": Facet("electoral_district", unknown="Άγνωστη"),
        "recommendation_from": Facet("recommendation_from", unknown=None),
        "last_contact_year": Facet("last_contact_date", unknown=NO_CONTACT, transform=year_of),
    }
