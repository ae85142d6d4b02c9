"""
In‑memory question and user storage for one client.

An ``AgreeDisagreeStorage`` owns the questions and users of a single
client and exposes them over HTTP for exactly as long as it is open.
Opening a store registers three routes on the shared
:class:`RouteRegistry`:

* ``/<client_name>`` – liveness probe, always ``200 OK``.
* ``/<client_name>/q`` – ``GET ?qid=`` retrieves, ``POST ?text=`` adds
  a question.
* ``/<client_name>/u`` – ``GET ?uid=`` retrieves, ``POST ?uid=`` adds
  a user.

Closing the store (``close()`` or leaving a ``with`` block) removes the
same three routes, after which the router answers 404 for them.

Both collections are insert‑only.  Questions are numbered from 1; list
position 0 holds a placeholder under ``QID_NONE`` so that the QID of a
question is also its index.  A reverse index from text to QID keeps
question texts unique, and users cannot be added twice.

Handlers are coroutines, so all requests for a store run on the event
loop thread one at a time.  The check‑then‑insert steps below rely on
that and take no locks of their own.
"""

import logging
import re
from typing import Dict, List, Optional

from fastapi import Request, Response, status

from agree_disagree_api.app.core.encoding import ResponseEncoder
from agree_disagree_api.app.core.router import RouteRegistry
from agree_disagree_api.app.schemas.client import is_valid_client_name
from agree_disagree_api.app.schemas.question import QID_NONE, Question
from agree_disagree_api.app.schemas.user import User


logger = logging.getLogger(__name__)

# Every store route accepts the common verbs: the liveness probe answers
# all of them, the question and user endpoints reply with their own 405.
STORE_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

LIVENESS_BODY = "OK\n"
METHOD_NOT_ALLOWED_BODY = "METHOD NOT ALLOWED\n"

# Leading integer of a query value, read the way C atoi does ("1x" is 1).
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class AgreeDisagreeStorage:
    """Questions and users of one client, bound to live HTTP routes.

    Parameters
    ----------
    client_name : str
        Non‑empty path segment under which the routes are registered.
    router : RouteRegistry
        Shared registry of the running application.  The store only
        registers and unregisters its own routes on it.
    encoder : Optional[ResponseEncoder]
        Renders handler responses.  A default encoder is used if omitted.
    """

    def __init__(
        self,
        client_name: str,
        router: RouteRegistry,
        encoder: Optional[ResponseEncoder] = None,
    ) -> None:
        if not client_name or not is_valid_client_name(client_name):
            raise ValueError(f"client_name must be a plain path segment, got {client_name!r}")
        self.client_name = client_name
        self._router = router
        self._encoder = encoder or ResponseEncoder()

        self._questions: List[Question] = [Question(qid=QID_NONE, text="")]
        self._questions_reverse_index: Dict[str, int] = {"": QID_NONE}
        self._users: Dict[str, User] = {}

        self._registered: List[str] = []
        self._closed = False
        try:
            self._register(self.root_path, self.handle_root, STORE_METHODS)
            self._register(self.questions_path, self.handle_q, STORE_METHODS)
            self._register(self.users_path, self.handle_u, STORE_METHODS)
        except Exception:
            # Leave no routes behind if the prefix is partly taken.
            self._unregister_all()
            raise
        logger.info("Opened storage for client %s", client_name)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------
    def _register(self, path, endpoint, methods) -> None:
        self._router.register(path, endpoint, methods)
        self._registered.append(path)

    def _unregister_all(self) -> None:
        while self._registered:
            # Dropped only once removed, so a failed close can be retried.
            self._router.unregister(self._registered[-1])
            self._registered.pop()

    def close(self) -> None:
        """Unregister the store's routes.  Closing twice is a no‑op."""
        if self._closed:
            return
        self._unregister_all()
        self._closed = True
        logger.info("Closed storage for client %s", self.client_name)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "AgreeDisagreeStorage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("AgreeDisagreeStorage is bound to live routes and cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("AgreeDisagreeStorage is bound to live routes and cannot be copied")

    # ------------------------------------------------------------------
    # Paths and read helpers
    # ------------------------------------------------------------------
    @property
    def root_path(self) -> str:
        return f"/{self.client_name}"

    @property
    def questions_path(self) -> str:
        return f"/{self.client_name}/q"

    @property
    def users_path(self) -> str:
        return f"/{self.client_name}/u"

    @property
    def paths(self) -> List[str]:
        return [self.root_path, self.questions_path, self.users_path]

    @property
    def question_count(self) -> int:
        """Number of real questions, not counting the placeholder."""
        return len(self._questions) - 1

    @property
    def user_count(self) -> int:
        return len(self._users)

    def get_question(self, qid: int) -> Optional[Question]:
        if not QID_NONE < qid < len(self._questions):
            return None
        return self._questions[qid]

    def get_user(self, uid: str) -> Optional[User]:
        return self._users.get(uid)

    # ------------------------------------------------------------------
    # HTTP handlers
    # ------------------------------------------------------------------
    async def handle_root(self) -> Response:
        return self._encoder.text(LIVENESS_BODY)

    async def handle_q(self, request: Request) -> Response:
        """Retrieve (``GET ?qid=``) or create (``POST ?text=``) a question."""
        if request.method == "GET":
            qid = _parse_qid(request.query_params.get("qid", ""))
            if qid == QID_NONE:
                return self._reject("NEED QID", status.HTTP_400_BAD_REQUEST)
            if qid < 0 or qid >= len(self._questions):
                return self._reject("QUESTION NOT FOUND", status.HTTP_404_NOT_FOUND)
            # Served under the default wrapper, unlike the tagged POST reply.
            return self._encoder.value(self._questions[qid])
        if request.method == "POST":
            text = request.query_params.get("text", "")
            if not text:
                return self._reject("NEED TEXT", status.HTTP_400_BAD_REQUEST)
            if text in self._questions_reverse_index:
                return self._reject("DUPLICATE QUESTION", status.HTTP_400_BAD_REQUEST)
            question = Question(qid=len(self._questions), text=text)
            self._questions.append(question)
            self._questions_reverse_index[text] = question.qid
            logger.info("Client %s added question %s", self.client_name, question.qid)
            return self._encoder.value(question, "question")
        return self._encoder.text(METHOD_NOT_ALLOWED_BODY, status.HTTP_405_METHOD_NOT_ALLOWED)

    async def handle_u(self, request: Request) -> Response:
        """Retrieve (``GET``) or create (``POST``) the user given by ``?uid=``."""
        uid = request.query_params.get("uid", "")
        if not uid:
            return self._reject("NEED UID", status.HTTP_400_BAD_REQUEST)
        if request.method == "GET":
            user = self._users.get(uid)
            if user is None:
                return self._reject("USER NOT FOUND", status.HTTP_404_NOT_FOUND)
            return self._encoder.value(user, "user")
        if request.method == "POST":
            if uid in self._users:
                return self._reject("CANNOT READD USER", status.HTTP_400_BAD_REQUEST)
            user = User(uid=uid)
            self._users[uid] = user
            logger.info("Client %s added user %s", self.client_name, uid)
            return self._encoder.value(user, "user")
        return self._encoder.text(METHOD_NOT_ALLOWED_BODY, status.HTTP_405_METHOD_NOT_ALLOWED)

    def _reject(self, message: str, status_code: int) -> Response:
        logger.debug("Client %s rejected request: %s (%s)", self.client_name, message, status_code)
        return self._encoder.text(message + "\n", status_code)


def _parse_qid(raw: str) -> int:
    """Read ``raw`` like ``atoi``: leading integer, ``QID_NONE`` if there is none."""
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else QID_NONE
