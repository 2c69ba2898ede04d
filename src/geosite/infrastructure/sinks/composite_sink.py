from src.geosite.application.ports import RuleSetSinkPort
from src.geosite.domain.entities import CompiledRuleBuckets


class CompositeRuleSetSink(RuleSetSinkPort):
    def __init__(self, primary: RuleSetSinkPort, secondary: RuleSetSinkPort) -> None:
        self.primary = primary
        self.secondary = secondary

    def prepare(self) -> None:
        self.primary.prepare()
        self.secondary.prepare()

    def write_rule_set(self, code: str, buckets: CompiledRuleBuckets) -> None:
        self.primary.write_rule_set(code, buckets)
        self.secondary.write_rule_set(code, buckets)

    def close(self) -> None:
        try:
            self.primary.close()
        finally:
            self.secondary.close()
