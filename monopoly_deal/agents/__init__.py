from monopoly_deal.agents.base import Agent, BotAction, Decision
from monopoly_deal.agents.easy import EasyAgent
from monopoly_deal.agents.expert import ExpertAgent
from monopoly_deal.agents.hard import HardAgent
from monopoly_deal.agents.medium import MediumAgent

AGENT_TYPES = {
    "easy": EasyAgent,
    "medium": MediumAgent,
    "hard": HardAgent,
    "expert": ExpertAgent,
}


def create_agent(difficulty: str, player_id: int, name: str, seed=None) -> Agent:
    """Build the bot for a difficulty tier."""
    try:
        agent_cls = AGENT_TYPES[difficulty.lower()]
    except KeyError:
        raise ValueError(f"Unknown bot difficulty: {difficulty}")
    return agent_cls(player_id, name, seed)


__all__ = [
    "Agent",
    "BotAction",
    "Decision",
    "EasyAgent",
    "MediumAgent",
    "HardAgent",
    "ExpertAgent",
    "AGENT_TYPES",
    "create_agent",
]
