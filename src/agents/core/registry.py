from typing import Dict

from agents.core.profile import AgentProfile


class AgentRegistry:
    def __init__(self):
        self._profiles: Dict[str, AgentProfile] = {}

    def register(self, profile: AgentProfile) -> None:
        if profile.mode in self._profiles:
            raise ValueError(f"Agent {profile.mode} already registered")
        self._profiles[profile.mode] = profile

    def get(self, mode: str) -> AgentProfile:
        if mode not in self._profiles:
            raise ValueError(f"Agent {mode} not registered")
        return self._profiles[mode]
