import os
import csv
import copy
import json
import threading
import LpReg.backend.backend as backend
from LpReg.nn.regularizers.regularization import as_array


class RegLogger:
    """
    Regularization statistics logger.

    For every weight array it records the penalty and the gradient the
    regularizer contributes (norm, mean, std and gradient/weight norm
    ratio), plus global totals. Can automatically save logs to JSON or CSV.

    Attributes:
        log_mode (str): Logging mode, either "step" or "epoch".
        log_every (int): Frequency of step logging (if mode="step").
        per_param (bool): Whether to record per-weight statistics.
        autosave (str or None): Format for autosaving logs ("json" or "csv").
        save_path (str): Directory path for saving logs.
        records (dict): Logged statistics.
        last_epoch (int): Tracks last epoch index for aggregation.
    """
    def __init__(self, regularizer, log_mode="epoch", log_every=1,
                 per_param=True, autosave=None, save_path="reg_logs"):
        if log_mode not in ("step", "epoch"):
            raise ValueError("log_mode must be 'step' or 'epoch'")
        if autosave not in (None, "json", "csv"):
            raise ValueError("autosave must be None, 'json' or 'csv'")
        self.regularizer = regularizer
        self.log_mode = log_mode
        self.log_every = log_every
        self.per_param = per_param

        self.records = {}
        self.last_epoch = -1
        self.epoch_accums = None

        self.autosave = autosave
        self.save_path = save_path
        self._save_lock = threading.Lock()
        self._save_threads = []
        self._save_seq = 0
        self._written_seq = 0
        if autosave:
            os.makedirs(save_path, exist_ok=True)

    # -------------------------------
    # Core Computations
    # -------------------------------
    def _collect_accums(self, weight):
        xp = backend.xp
        W = as_array(weight)
        g = self.regularizer.gradient(W)

        grad_norm_sq = float(xp.sum(g * g, dtype=xp.float64))
        weight_norm = float(xp.linalg.norm(W.astype(xp.float64).ravel()))

        return {
            "penalty": self.regularizer.loss(W),
            "grad_sum": float(xp.sum(g, dtype=xp.float64)),
            "grad_sq_sum": grad_norm_sq,
            "count": int(g.size),
            "ratio": grad_norm_sq ** 0.5 / (weight_norm + 1e-12),
            "n": 1,
        }

    @staticmethod
    def _merge(acc, new):
        for k, v in new.items():
            acc[k] = acc.get(k, 0.0) + v
        return acc

    @staticmethod
    def _finalize(acc):
        """Convert accumulators into scalar statistics."""
        n = acc.get("n", 1) or 1
        count = acc["count"] or 1
        grad_mean = acc["grad_sum"] / count
        grad_var = acc["grad_sq_sum"] / count - grad_mean ** 2
        return {
            "penalty": acc["penalty"] / n,
            "grad_norm": (acc["grad_sq_sum"] / n) ** 0.5,
            "grad_mean": grad_mean,
            "grad_std": max(grad_var, 0.0) ** 0.5,
            "grad/weight": acc["ratio"] / n,
        }

    def _collect(self, weights):
        per_param = [self._collect_accums(w) for w in weights]
        total = {}
        for acc in per_param:
            for k in ("penalty", "grad_sum", "grad_sq_sum", "count"):
                total[k] = total.get(k, 0.0) + acc[k]
        if per_param:
            total["ratio"] = sum(acc["ratio"] for acc in per_param) / len(per_param)
        else:
            total = {"penalty": 0.0, "grad_sum": 0.0, "grad_sq_sum": 0.0, "count": 0, "ratio": 0.0}
        total["n"] = 1
        return per_param, total

    def _to_row(self, per_param, total):
        row = {}
        if self.per_param:
            for i, acc in enumerate(per_param):
                for k, v in self._finalize(acc).items():
                    row[f"param_{i}_{k}"] = v
        stats = self._finalize(total)
        row["total_penalty"] = stats.pop("penalty")
        row["total_grad_norm"] = stats.pop("grad_norm")
        row.update(stats)
        return row

    # -------------------------------
    # Logging
    # -------------------------------
    def add(self, weights, epoch, step, n_steps):
        """
        Collect and log regularization statistics for the given weights.

        Args:
            weights: iterable of weight arrays (or parameters).
            epoch (int): Current epoch number.
            step (int): Current step index within the epoch.
            n_steps (int): Total steps per epoch.
        """
        weights = list(weights)

        if self.log_mode == "epoch":
            if epoch > self.last_epoch:
                self.epoch_accums = {"params": [{} for _ in weights], "global": {}}
                self.last_epoch = epoch

            per_param, total = self._collect(weights)
            for i, acc in enumerate(per_param):
                self._merge(self.epoch_accums["params"][i], acc)
            self._merge(self.epoch_accums["global"], total)

            if step + 1 == n_steps:
                self.records[f"Epoch_{epoch}"] = self._to_row(
                    self.epoch_accums["params"], self.epoch_accums["global"]
                )
                self._autosave_async()

        elif self.log_every is None or step % self.log_every == 0:
            per_param, total = self._collect(weights)
            self.records.setdefault(f"Epoch_{epoch}", {})[f"step_{step}"] = self._to_row(per_param, total)
            self._autosave_async()

    # -------------------------------
    # Export
    # -------------------------------
    def to_json(self, filepath, records=None):
        """Save all logged statistics (or a `records` snapshot) to a JSON file."""
        records = self.records if records is None else records
        with open(filepath, "w") as f:
            json.dump(records, f, indent=4)

    def to_csv(self, filepath, records=None):
        """Save flattened log data (or a `records` snapshot) to CSV."""
        records = self.records if records is None else records
        flat_records = []
        for epoch, data in records.items():
            if isinstance(data, dict) and any(k.startswith("step_") for k in data):
                for step, vals in data.items():
                    row = {"epoch": epoch, "step": step}
                    row.update(vals)
                    flat_records.append(row)
            else:
                row = {"epoch": epoch}
                row.update(data)
                flat_records.append(row)

        keys = sorted({k for row in flat_records for k in row.keys()})
        with open(filepath, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=keys)
            writer.writeheader()
            writer.writerows(flat_records)

    def _autosave(self, records, seq):
        """Write a records snapshot to `save_path`; stale snapshots are skipped."""
        with self._save_lock:
            if seq < self._written_seq:
                return
            if self.autosave == "json":
                self.to_json(os.path.join(self.save_path, "reg_logs.json"), records)
            elif self.autosave == "csv":
                self.to_csv(os.path.join(self.save_path, "reg_logs.csv"), records)
            self._written_seq = seq

    def _autosave_async(self):
        """Snapshot the records and save them in a background thread."""
        if not self.autosave:
            return
        self._save_seq += 1
        snapshot = copy.deepcopy(self.records)
        t = threading.Thread(target=self._autosave, args=(snapshot, self._save_seq), daemon=True)
        self._save_threads = [th for th in self._save_threads if th.is_alive()]
        self._save_threads.append(t)
        t.start()

    def flush(self):
        """Block until every pending autosave has been written."""
        for t in self._save_threads:
            t.join()
        self._save_threads = []
