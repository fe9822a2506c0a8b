class ScriptedRng:
    """Stand-in for numpy's Generator that replays fixed integer draws."""

    def __init__(self, values, repeat_last=False, cycle=False):
        self.values = list(values)
        self.repeat_last = repeat_last
        self.cycle = cycle
        self.calls = 0

    def integers(self, low, high=None):
        if self.calls >= len(self.values):
            if self.cycle:
                value = self.values[self.calls % len(self.values)]
            elif self.repeat_last:
                value = self.values[-1]
            else:
                raise AssertionError("ScriptedRng ran out of values")
        else:
            value = self.values[self.calls]
        self.calls += 1
        return value
