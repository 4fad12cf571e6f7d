"""Stream transactions.

A stream transaction spans several requests: ``begin`` returns an id that
is attached as the ``x-arango-trx-id`` header to every operation belonging
to the transaction, and the transaction ends with exactly one ``commit`` or
``abort``. The client does not track state locally; using a transaction
after it ended is rejected by the server.

:meth:`TransactionAPI.scope` and :meth:`TransactionAPI.run` guarantee that a
transaction they begin is committed or aborted before they return.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from ..errors import ArangoConfigurationError
from ..logging import get_logger
from ..query.cursor import Cursor, QueryAPI, QueryOptions
from ..resources._base import pick, require
from ..resources.document import DocumentAPI, DocumentOptions
from ..transport.http_client import ArangoHttpClient

TRANSACTION_HEADER = "x-arango-trx-id"

TRANSACTION_OPTIONS = (
    "waitForSync",
    "allowImplicit",
    "lockTimeout",
    "maxTransactionSize",
    "skipFastLockRound",
)

T = TypeVar("T")

Collections = Mapping[str, str | Sequence[str]]

logger = get_logger(__name__)


class TransactionStatus(str, Enum):
    RUNNING = "running"
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass(slots=True)
class TransactionOptions:
    """Options for ``begin``. Only fields that are set are sent."""

    wait_for_sync: bool | None = None
    allow_implicit: bool | None = None
    lock_timeout: int | None = None
    max_transaction_size: int | None = None
    skip_fast_lock_round: bool | None = None


@dataclass(slots=True)
class TransactionHandle:
    """Id and last known status of a stream transaction."""

    id: str
    status: TransactionStatus = TransactionStatus.RUNNING

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> TransactionHandle:
        result = data.get("result") or {}
        return cls(id=result["id"], status=TransactionStatus(result.get("status", "running")))


def _require_id(transaction_id: str) -> None:
    require(transaction_id, "Transaction: transaction_id is required")


class TransactionAPI:
    """JavaScript and stream transactions, plus transaction-scoped operations."""

    def __init__(self, http: ArangoHttpClient, query: QueryAPI, document: DocumentAPI) -> None:
        self._http = http
        self._query = query
        self._document = document

    # ------------------------------------------------------------------
    # JavaScript transactions (single request)
    # ------------------------------------------------------------------
    def execute(
        self,
        collections: Collections,
        action: str,
        params: Any = None,
        options: TransactionOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Run ``action`` (JavaScript source) server-side in one transaction.

        ``options`` is filtered the same way as for :meth:`begin`.
        """
        if not collections:
            raise ArangoConfigurationError("Transaction: collections is required")
        require(action, "Transaction: action is required")

        body: dict[str, Any] = {
            "collections": dict(collections),
            "action": action,
            **pick(options, TRANSACTION_OPTIONS),
        }
        if params is not None:
            body["params"] = params
        return self._http.post("/_api/transaction", body).get("result")

    # ------------------------------------------------------------------
    # Stream transactions
    # ------------------------------------------------------------------
    def begin(
        self,
        collections: Collections,
        options: TransactionOptions | Mapping[str, Any] | None = None,
    ) -> TransactionHandle:
        """Begin a stream transaction.

        Args:
            collections: ``{"read": [...], "write": [...], "exclusive": [...]}``
            options: Transaction options
        """
        if not collections:
            raise ArangoConfigurationError("Transaction: collections is required")

        body = {"collections": dict(collections), **pick(options, TRANSACTION_OPTIONS)}
        trx = TransactionHandle.from_response(self._http.post("/_api/transaction/begin", body))
        logger.debug("transaction_begun", transaction_id=trx.id)
        return trx

    def status(self, transaction_id: str) -> TransactionHandle:
        _require_id(transaction_id)
        return TransactionHandle.from_response(self._http.get(f"/_api/transaction/{transaction_id}"))

    def commit(self, transaction_id: str) -> TransactionHandle:
        _require_id(transaction_id)
        return TransactionHandle.from_response(self._http.put(f"/_api/transaction/{transaction_id}", {}))

    def abort(self, transaction_id: str) -> TransactionHandle:
        _require_id(transaction_id)
        return TransactionHandle.from_response(self._http.delete(f"/_api/transaction/{transaction_id}"))

    def list(self) -> list[dict[str, Any]]:
        """Running stream transactions of the current database."""
        return self._http.get("/_api/transaction").get("transactions", [])

    @contextmanager
    def scope(
        self,
        collections: Collections,
        options: TransactionOptions | Mapping[str, Any] | None = None,
    ) -> Iterator[TransactionHandle]:
        """Begin a transaction for the duration of a ``with`` block.

        The transaction is committed when the block exits normally. If the
        block raises, it is aborted and the exception propagates; a failure
        of the abort itself is logged and suppressed so it cannot hide the
        original error. A failing commit propagates.
        """
        trx = self.begin(collections, options)
        try:
            yield trx
        except BaseException:
            self._abort_quietly(trx)
            raise
        committed = self.commit(trx.id)
        trx.status = committed.status

    def run(
        self,
        collections: Collections,
        callback: Callable[[str], T],
        options: TransactionOptions | Mapping[str, Any] | None = None,
    ) -> T:
        """Call ``callback(transaction_id)`` inside a stream transaction.

        Returns:
            The callback's return value, after a successful commit
        """
        with self.scope(collections, options) as trx:
            return callback(trx.id)

    def _abort_quietly(self, trx: TransactionHandle) -> None:
        try:
            aborted = self.abort(trx.id)
        except Exception as exc:
            logger.warning("transaction_abort_failed", transaction_id=trx.id, error=str(exc))
            return
        trx.status = aborted.status

    # ------------------------------------------------------------------
    # Transaction-scoped operations
    # ------------------------------------------------------------------
    @staticmethod
    def headers(transaction_id: str) -> dict[str, str]:
        """Headers that make a request part of ``transaction_id``."""
        return {TRANSACTION_HEADER: transaction_id}

    def query(
        self,
        transaction_id: str,
        aql: str,
        bind_vars: Mapping[str, Any] | None = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> Cursor:
        _require_id(transaction_id)
        return self._query.execute(aql, bind_vars, options, headers=self.headers(transaction_id))

    def create_document(
        self,
        transaction_id: str,
        collection: str,
        document: Mapping[str, Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        _require_id(transaction_id)
        return self._document.create(collection, document, options, headers=self.headers(transaction_id))

    def update_document(
        self,
        transaction_id: str,
        collection: str,
        key: str,
        document: Mapping[str, Any],
        options: DocumentOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        _require_id(transaction_id)
        return self._document.update(
            collection, key, document, options, headers=self.headers(transaction_id)
        )

    def delete_document(
        self,
        transaction_id: str,
        collection: str,
        key: str,
        options: DocumentOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        _require_id(transaction_id)
        return self._document.delete(collection, key, options, headers=self.headers(transaction_id))
