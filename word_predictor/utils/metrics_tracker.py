# metrics_tracker.py - running sums/averages for command latency

import json
import os
from collections import defaultdict
from typing import Optional


class Metrics:
    def __init__(self, path: Optional[str] = None, log=None):
        # path=None keeps everything in memory
        self.path = path
        self.log = log
        self.m = defaultdict(float)
        self.n = defaultdict(int)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            for k, v in d.items():
                self.m[k] = float(v["sum"])
                self.n[k] = int(v["count"])
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            if self.log:
                self.log.warning(f"ignoring unreadable metrics file {self.path}: {e}")

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key, val):
        self.m[key] += val
        self.n[key] += 1
        self.save()

    def count(self, key):
        return self.n.get(key, 0)

    def avg(self, key):
        if self.n.get(key, 0) == 0: return 0.0
        return self.m[key] / self.n[key]

    def show(self, out=print):
        out("metrics:")
        for k in self.m:
            out(f"  {k:30} {self.avg(k):.6f}  (n={self.n[k]})")
