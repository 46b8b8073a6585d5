from silkcss.parser.transformer import parse_rule, parse_rules

__all__ = ["parse_rule", "parse_rules"]
