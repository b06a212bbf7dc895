"""World systems - layered wave surface and rising bubbles."""

from .waves import WaveOscillator, WaveField
from .bubbles import BubbleParticle, BubblePool
