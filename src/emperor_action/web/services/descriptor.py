"""Discovery payload builder for action clients."""

from emperor_action.web.contracts.actions import (
    ActionGetResponse,
    ActionLinks,
    LinkedAction,
)
from emperor_action.web.services.pricing import PricingView


def build_action_descriptor(view: PricingView, icon: str, href: str) -> ActionGetResponse:
    """Wrap a pricing view into the GET payload.

    The single linked action always targets ``href``, whether or not the game
    is active.
    """
    return ActionGetResponse(
        icon=icon,
        label=view.label,
        title=view.title,
        description=view.description,
        links=ActionLinks(actions=[LinkedAction(label=view.label, href=href)]),
    )
