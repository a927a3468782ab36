# spamfilter/config.py
# Pipeline settings shared by the library and the CLIs.

from dataclasses import dataclass, asdict

from .exceptions import ConfigError

RNG = 42

SOLVERS = ("newton-cholesky", "newton-cg", "lbfgs")


@dataclass(frozen=True)
class PipelineConfig:
    split_seed: int = RNG
    split_fraction: float = 0.5      # share of messages in TRAIN
    stratify: bool = True
    dictionary_size: int = 30        # K
    min_token_length: int = 3
    decision_threshold: float = 0.5
    # optimizer of the (unpenalized) logistic fit
    solver: str = "newton-cholesky"
    max_iter: int = 1000

    def __post_init__(self):
        if not 0.0 < self.split_fraction < 1.0:
            raise ConfigError(f"split_fraction must be in (0, 1), got {self.split_fraction}")
        if self.dictionary_size < 1:
            raise ConfigError(f"dictionary_size must be >= 1, got {self.dictionary_size}")
        if self.min_token_length < 1:
            raise ConfigError(f"min_token_length must be >= 1, got {self.min_token_length}")
        if not 0.0 < self.decision_threshold < 1.0:
            raise ConfigError(f"decision_threshold must be in (0, 1), got {self.decision_threshold}")
        if self.solver not in SOLVERS:
            raise ConfigError(f"solver must be one of {SOLVERS}, got {self.solver!r}")
        if self.max_iter < 1:
            raise ConfigError(f"max_iter must be >= 1, got {self.max_iter}")

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def add_arguments(ap):
        """Register one CLI flag per field on an argparse parser."""
        d = PipelineConfig()
        ap.add_argument("--split-seed", type=int, default=d.split_seed)
        ap.add_argument("--split-fraction", type=float, default=d.split_fraction,
                        help="share of messages used for TRAIN")
        ap.add_argument("--no-stratify", dest="stratify", action="store_false")
        ap.add_argument("--dictionary-size", type=int, default=d.dictionary_size)
        ap.add_argument("--min-token-length", type=int, default=d.min_token_length)
        ap.add_argument("--threshold", dest="decision_threshold", type=float,
                        default=d.decision_threshold)
        ap.add_argument("--solver", choices=SOLVERS, default=d.solver)
        ap.add_argument("--max-iter", type=int, default=d.max_iter)
        return ap

    @classmethod
    def from_args(cls, ns):
        return cls(
            split_seed=ns.split_seed,
            split_fraction=ns.split_fraction,
            stratify=ns.stratify,
            dictionary_size=ns.dictionary_size,
            min_token_length=ns.min_token_length,
            decision_threshold=ns.decision_threshold,
            solver=ns.solver,
            max_iter=ns.max_iter,
        )
