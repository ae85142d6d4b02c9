"""
Service layer.

``storage`` holds the per‑client question/user store that registers its
own routes; ``client_service`` keeps track of the stores open in an
application.  API handlers call into these services and never touch
the collections directly.
"""
