"""
Neuron models.

Each variant is a frozen parameter dataclass implementing the NeuronModel
interface (reset / update / get_state) over an explicit state array:

- ADEXP: adaptive exponential integrate-and-fire, state [v, w, fired]
- Izhikevich: quadratic integrate-and-fire with recovery, state [v, u, fired]
- LIF: leaky integrate-and-fire, state [v]
"""

from spikenet.models.base import NeuronModel
from spikenet.models.adexp_neuron import ADEXP
from spikenet.models.izhikevich_neuron import Izhikevich
from spikenet.models.lif_neuron import LIF

MODELS = {
    'adexp': ADEXP,
    'izhikevich': Izhikevich,
    'lif': LIF,
}

__all__ = [
    'NeuronModel',
    'ADEXP',
    'Izhikevich',
    'LIF',
    'MODELS',
]
