"""
Pydantic schema definitions.

``question`` and ``user`` describe the records held by a store and the
exact JSON shape they are rendered in.  ``client`` holds the request
and response bodies of the management API.
"""
