"""Sample record payloads used across the tests."""

LOCATION = {"name": "Maputo", "is_province": True, "is_capital_city": True, "is_municipality": False, "is_active": True}

ENTITY_TYPE = {"name": "Sociedade Anónima", "description": "SA", "is_active": True}

USER = {
    "email": "ana@example.com",
    "firstname": "Ana",
    "lastname": "Mabunda",
    "password": "s3cret",
    "expirydate": "2027-12-31",
    "usertypeid": 1,
}

ENTITY = {
    "officialname": "Cervejas de Moçambique, S.A.",
    "nuit": "400123456",
    "ssnumber": "SS-991",
    "registrationnumber": "R-2001",
    "registrationdate": "2001-03-15",
    "entitytypeid": 1,
    "activitytypeid": 2,
    "entitystatusid": 1,
}

BRANCH = {"entityid": 1, "locationid": 1, "entitystatusid": 1, "address": "Av. 25 de Setembro"}

HOURS = {"branchid": 1, "weekday": "Segunda-feira", "opentime": "08:00", "closetime": "17:00"}
