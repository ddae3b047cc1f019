"""Store du client / Client store.

Conteneur explicite de l'etat : recoit le reducer et le client API a la
construction, notifie les abonnes a chaque nouveau modele.
Explicit state container: gets the reducer and API client at construction and
notifies subscribers whenever the model changes.
"""

import asyncio
import logging
from collections.abc import Callable

from throttle_vault.client.api import GarageApi
from throttle_vault.client.auth import ANONYMOUS, AuthUser
from throttle_vault.client.messages import Msg
from throttle_vault.client.model import Model, init
from throttle_vault.client.update import update as default_update

logger = logging.getLogger("throttle_vault.client.store")

Listener = Callable[[Model], None]


class Store:
    def __init__(
        self,
        api: GarageApi,
        update=default_update,
        model: Model = init,
        user: AuthUser = ANONYMOUS,
    ):
        self._api = api
        self._update = update
        self._model = model
        self._user = user
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def model(self) -> Model:
        return self._model

    @property
    def user(self) -> AuthUser:
        return self._user

    def set_user(self, user: AuthUser) -> None:
        self._user = user

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Abonner une vue ; renvoie la desinscription / Subscribe a view; returns the unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def dispatch(self, message: Msg) -> Model:
        """Appliquer un message puis ses suites / Apply a message, then its follow-ups.

        The reducer step never awaits, so two dispatches cannot interleave inside it.
        A failing effect propagates out of this call unchanged.
        """
        result = self._update(message, self._model, self._user, api=self._api)
        if isinstance(result, tuple):
            model, effect = result
        else:
            model, effect = result, None
        self._set_model(model)

        if effect is not None:
            follow_up = await effect
            await self.dispatch(follow_up)
        return self._model

    def send(self, message: Msg) -> asyncio.Task:
        """Dispatch en tache de fond (vues) / Fire-and-forget dispatch for views.

        Failures are logged; callers wanting the error should await the returned task.
        """
        task = asyncio.get_running_loop().create_task(self.dispatch(message))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Store dispatch failed: %s", exc, exc_info=exc)

    def _set_model(self, model: Model) -> None:
        if model is self._model:
            return
        self._model = model
        for listener in list(self._listeners):
            listener(model)
