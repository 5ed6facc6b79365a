# -*- coding: utf-8 -*-
"""
A small fit/transform pipeline in the style of `sklearn.pipeline.Pipeline`.

Each step is fit on the output of the previous one; the caption stages
(parse -> shift) are chained through it so that every stage keeps its fitted
result (``subs_``) for inspection afterwards.
"""
from __future__ import annotations
from collections import defaultdict
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple
from typing_extensions import Protocol

logger: logging.Logger = logging.getLogger(__name__)


class TransformerProtocol(Protocol):
    fit: Callable[..., "TransformerProtocol"]
    transform: Callable[[Any], Any]


class TransformerMixin(TransformerProtocol):
    """Mixin class for all caption transformers."""

    def fit_transform(self, X: Any, *_: Any) -> Any:
        return self.fit(X).transform(X)


class Pipeline:
    def __init__(self, steps: List[Tuple[str, TransformerProtocol]], verbose: bool = False) -> None:
        self.steps = list(steps)
        self.verbose = verbose
        self._validate_steps()

    def _validate_steps(self) -> None:
        if not self.steps:
            raise ValueError('Pipeline needs at least one step')
        names = [name for name, _ in self.steps]
        if len(set(names)) != len(names):
            raise ValueError('Pipeline step names must be unique: %s' % names)
        for name, step in self.steps:
            if not hasattr(step, 'fit') or not hasattr(step, 'transform'):
                raise TypeError(
                    "All steps should implement fit and transform; "
                    "'%s' (type %s) doesn't" % (name, type(step))
                )

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, ind):
        """Index by position or by step name; slices give a sub-pipeline."""
        if isinstance(ind, slice):
            if ind.step not in (1, None):
                raise ValueError('Pipeline slicing only supports a step of 1')
            return self.__class__(self.steps[ind], verbose=self.verbose)
        if isinstance(ind, str):
            return self.named_steps[ind]
        return self.steps[ind][1]

    @property
    def named_steps(self) -> Dict[str, TransformerProtocol]:
        return dict(self.steps)

    def _log_step(self, step_idx: int) -> None:
        if self.verbose:
            logger.info('(step %d of %d) %s', step_idx + 1, len(self.steps), self.steps[step_idx][0])

    def fit(self, X: Any, *_: Any) -> "Pipeline":
        Xt = X
        last = len(self.steps) - 1
        for step_idx, (_, step) in enumerate(self.steps):
            self._log_step(step_idx)
            if step_idx == last:
                step.fit(Xt)
            else:
                Xt = _fit_transform_one(step, Xt)
        return self

    def fit_transform(self, X: Any, *_: Any) -> Any:
        Xt = X
        for step_idx, (_, step) in enumerate(self.steps):
            self._log_step(step_idx)
            Xt = _fit_transform_one(step, Xt)
        return Xt

    def transform(self, X: Optional[Any] = None) -> Any:
        Xt = X
        for _, step in self.steps:
            Xt = step.transform(Xt)
        return Xt


def _fit_transform_one(transformer: TransformerProtocol, X: Any) -> Any:
    if hasattr(transformer, 'fit_transform'):
        return transformer.fit_transform(X)
    return transformer.fit(X).transform(X)


def _name_steps(steps) -> List[Tuple[str, Any]]:
    """Name steps after their lowercased types, numbering duplicates."""
    names = [type(step).__name__.lower() for step in steps]
    namecount: Dict[str, int] = defaultdict(int)
    for name in names:
        namecount[name] += 1
    duplicated = {name for name, count in namecount.items() if count > 1}
    for i in reversed(range(len(steps))):
        name = names[i]
        if name in duplicated:
            names[i] += '-%d' % namecount[name]
            namecount[name] -= 1
    return list(zip(names, steps))


def make_pipeline(*steps: TransformerProtocol, **kwargs: Any) -> Pipeline:
    verbose = kwargs.pop('verbose', False)
    if kwargs:
        raise TypeError('Unknown keyword arguments: "{}"'.format(list(kwargs.keys())[0]))
    return Pipeline(_name_steps(steps), verbose=verbose)
