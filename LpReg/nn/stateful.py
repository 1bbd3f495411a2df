class Stateful:
    """
    Settings that can be written to and restored from a structured archive.

    `get_config()` returns the constructor arguments, `state_dict()` adds the
    class name so the archive can be rebuilt without knowing the type.
    """
    def state_dict(self):
        return {"class": type(self).__name__, **self.get_config()}

    def load_state_dict(self, state):
        pass

    def get_config(self):
        return {}

    @classmethod
    def from_config(cls, cfg):
        return cls(**cfg)
