"""Explanation pipeline.

Runs one invocation end to end: validate the selection, resolve a
credential and, only when both are present, make **one** request.
Every outcome is returned as a value.
"""

import asyncio
import logging

from codeguide.ai.explainer import ExplanationRequester
from codeguide.core.credentials import CredentialResolver
from codeguide.models import AbsentCredential, NoSelection, Outcome, Selection

logger = logging.getLogger(__name__)


async def explain_selection(
    selection: Selection,
    resolver: CredentialResolver,
    requester: ExplanationRequester,
    *,
    log: logging.Logger = logger,
) -> Outcome:
    """Explain *selection*.

    Args:
        selection: Text chosen by the user.
        resolver: Supplies the API key.
        requester: Performs the outbound call.
        log: Logger receiving diagnostics.

    Returns:
        ``NoSelection`` or ``AbsentCredential`` without touching the
        network, otherwise the requester's result.
    """
    if selection.is_blank():
        log.debug("Blank selection from %s", selection.origin)
        return NoSelection()

    credential = resolver.resolve()
    if credential is None:
        return AbsentCredential()

    log.debug("Using %s API key %s", credential.source, credential.masked())
    return await requester.request(selection, credential)


def run_explain(
    selection: Selection,
    resolver: CredentialResolver,
    requester: ExplanationRequester,
    *,
    log: logging.Logger = logger,
) -> Outcome:
    """Blocking wrapper around :func:`explain_selection`."""
    return asyncio.run(explain_selection(selection, resolver, requester, log=log))
