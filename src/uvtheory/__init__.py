"""uvtheory.

Residual Helmholtz energy of Mie fluids and their mixtures with UV theory. Contains the
following modules:

parameters: Pure component records and the combined parameter set of a mixture.

state: Temperature, volume and amounts at which energies are evaluated.

mixing: One-fluid mixing rules.

hard_sphere, reference_perturbation, attractive_perturbation: The contributions to
the residual Helmholtz energy, for the Barker-Henderson and the
Weeks-Chandler-Andersen division of the potential.

eos: Assembly of the contributions into a model.

properties: Residual properties obtained by automatic differentiation.

ad: Forward-mode automatic differentiation with dual numbers.

isort:skip_file

"""

import configparser
import os
from pathlib import Path


__version__ = "0.1.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("uvtheory.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = dict(cfg)
except configparser.Error:
    # the assumption is that no configurations are given
    config = {}

__all__ = []

from . import ad
from . import utils
from . import parameters
from . import state
from . import mixing
from . import hard_sphere
from . import reference_perturbation
from . import attractive_perturbation
from . import eos
from . import properties

from .utils import *
from .parameters import *
from .state import *
from .mixing import *
from .hard_sphere import *
from .reference_perturbation import *
from .attractive_perturbation import *
from .eos import *
from .properties import *

__all__.extend(utils.__all__)
__all__.extend(parameters.__all__)
__all__.extend(state.__all__)
__all__.extend(mixing.__all__)
__all__.extend(hard_sphere.__all__)
__all__.extend(reference_perturbation.__all__)
__all__.extend(attractive_perturbation.__all__)
__all__.extend(eos.__all__)
__all__.extend(properties.__all__)
