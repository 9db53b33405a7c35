from rest_framework.parsers import JSONParser


class AnyMediaJSONParser(JSONParser):
    """
    Decodes the body as JSON whatever Content-Type the caller sent
    (curl -d defaults to form-urlencoded, beacons send text/plain).
    """
    media_type = "*/*"
