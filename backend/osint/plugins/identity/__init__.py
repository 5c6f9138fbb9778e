from .sherlock import SherlockPlugin, parse_sherlock_output

__all__ = ["SherlockPlugin", "parse_sherlock_output"]
