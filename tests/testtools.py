from collections.abc import Sequence

from helpdoc.models import RunResult


class ScriptedRunner:
    "A RunFunction answering from a table of argument tuples"

    def __init__(self, responses: dict, binary: str = "tool", default: RunResult | None = None):
        self.binary = binary
        self.responses = {tuple(key): value for key, value in responses.items()}
        self.default = default or RunResult(output="", exit_code=1)
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, binary: str, args: Sequence[str]) -> RunResult:
        assert binary == self.binary
        self.calls.append(tuple(args))
        response = self.responses.get(tuple(args), self.default)
        if isinstance(response, str):
            return RunResult(output=response, exit_code=0)
        return response


class RaisingRunner:
    "A RunFunction breaking its contract"

    async def __call__(self, binary: str, args: Sequence[str]) -> RunResult:
        raise RuntimeError("runner exploded")
