"""
connectors — outbound integrations with external services.

Currently a single geocoder (Nominatim / OpenStreetMap) used to turn a
location's address into coordinates for its map link.  Each provider is a
subclass of BaseGeocoder.
"""
