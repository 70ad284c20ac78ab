from typing import Callable, Dict, List, Optional, Type

from ExactMS.config.logger_config import get_logger
from ExactMS.mass_detection.peak_models.gaussian_peak import GaussianPeak
from ExactMS.mass_detection.peak_models.lorentzian_peak import LorentzianPeak
from ExactMS.mass_detection.peak_models.peak_model import PeakModel

logger = get_logger(__name__)

PeakModelFactory = Callable[[], PeakModel]


class PeakModelRegistry:
    """
    Registry mapping peak model names to their implementation.
    """

    _model_types: Dict[str, Type[PeakModel]] = {}

    @classmethod
    def register(cls, model_cls: Type[PeakModel]) -> Type[PeakModel]:
        if not model_cls.name:
            raise ValueError(f"Peak model {model_cls.__name__} does not define a name.")
        if model_cls.name in cls._model_types:
            raise ValueError(f"Peak model '{model_cls.name}' is already registered.")
        cls._model_types[model_cls.name] = model_cls
        return model_cls

    @classmethod
    def names(cls) -> List[str]:
        return list(cls._model_types.keys())

    @classmethod
    def resolve(cls, name: str) -> Optional[PeakModelFactory]:
        """
        Resolve a model name to a factory producing fresh model instances.

        :param name: str, the registered name of the peak model (e.g. 'Gaussian').
        :return: Optional[PeakModelFactory], None if no model with this name exists.
        """
        model_cls = cls._model_types.get(name)
        if model_cls is None:
            logger.warning(
                f"Unknown peak model '{name}' (available: {', '.join(cls.names())}). "
                f"Shoulder peaks will not be removed."
            )
            return None
        return model_cls


PeakModelRegistry.register(GaussianPeak)
PeakModelRegistry.register(LorentzianPeak)
