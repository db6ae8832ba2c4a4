from credhub.actions.action import Action

__all__ = ["Action"]
