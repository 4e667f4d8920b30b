"""Direct link budget of a single edge.

``direct_link_budget`` evaluates one physical segment in isolation. The edge's
link type selects a handler from a closed table; each handler is a pure
function of the transmitter, receiver and edge parameters returning a
``Partial`` (loss, latency, coverage and technology extensions). A shared
post-processing stage then derives received power, SNR, the Shannon capacity
fallback and the symbol-rate bitrate identically for every technology.

Formulas (d in km, P in dBm):

- Optical: loss = att*d + connectors + splices; fiber propagation at 2e8 m/s;
  capacity is a fixed 1000 MHz x 8 proxy; margin = (P - loss) - sensitivity.
- Copper(RJ45): loss scales the per-100 m attenuation to the length in
  meters; 5 ns/m latency; capacity is the nominal rate.
- LineOfSight: microwave link equation in the linear domain with antenna
  gains, waveguide and branching losses; 10 ms latency proxy.
- GSM/UMTS/4G/5G: FSPL = 32.4 + 20 log10(d) + 20 log10(f_GHz), plus cable
  loss, minus antenna gains, with per-generation capacity extensions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from linkbudget.algorithms.cellular import (
    cell_count,
    cluster_size,
    interference_reduction_4g,
    interference_reduction_5g,
    numerology_5g,
    spectral_efficiency,
)
from linkbudget.algorithms.params import (
    Params,
    first_number,
    param_number,
    param_text,
)
from linkbudget.config import ENGINE_CONFIG, EngineConfig
from linkbudget.logging import get_logger
from linkbudget.model.network import Edge, Node
from linkbudget.results.link import LinkBudgetResult, NumerologyInfo
from linkbudget.types.base import FrequencyBand, LinkType

logger = get_logger(__name__)

#: Propagation speed in fiber (m/s).
FIBER_PROPAGATION_SPEED = 2e8

#: Optical bandwidth proxy (MHz) used for the fixed fiber capacity.
OPTICAL_BANDWIDTH_MHZ = 1000.0

#: Copper propagation delay (s/m).
COPPER_DELAY_PER_M = 5e-9

#: Maximum RJ45 segment length (m).
COPPER_MAX_LENGTH_M = 100.0

#: UMTS chip rate (chips/s).
UMTS_CHIP_RATE = 3.84e6

#: GSM channel width (MHz).
GSM_CHANNEL_MHZ = 0.2

#: Capacity kept after 5G network-slicing overhead.
NETWORK_SLICING_EFFICIENCY = 0.9

#: Speed of light (m/s).
SPEED_OF_LIGHT = 3e8

#: Default carrier frequency (MHz) per cellular generation.
DEFAULT_FREQUENCY_MHZ: Dict[LinkType, float] = {
    LinkType.GSM: 900.0,
    LinkType.UMTS: 2100.0,
    LinkType.LTE: 2600.0,
    LinkType.NR: 3500.0,
}

#: SNR (dB) above which the Shannon formula is evaluated in log form.
_SHANNON_LOG_FORM_DB = 300.0

#: Fixed latency proxy (ms) per technology without a distance-based model.
FIXED_LATENCY_MS: Dict[LinkType, float] = {
    LinkType.LINE_OF_SIGHT: 10.0,
    LinkType.GSM: 300.0,
    LinkType.UMTS: 100.0,
    LinkType.LTE: 50.0,
    LinkType.NR: 1.0,
}


@dataclass(frozen=True)
class LinkContext:
    """Inputs shared by every technology handler."""

    tx: Params
    rx: Params
    edge: Params
    power: float
    distance: float
    bitrate_bps: float
    config: EngineConfig


@dataclass(frozen=True)
class Partial:
    """Technology-specific part of a direct result.

    A capacity of 0 means the handler leaves capacity to the Shannon fallback.
    """

    loss: float
    latency: float
    coverage: float
    capacity: float = 0.0
    margin: Optional[float] = None
    frequencies_per_cell: Optional[float] = None
    reuse_distance: Optional[float] = None
    cellular_capacity: Optional[float] = None
    numerology: Optional[NumerologyInfo] = None
    band: Optional[FrequencyBand] = None


Handler = Callable[[LinkContext], Partial]


def _optical(ctx: LinkContext) -> Partial:
    attenuation = param_number(ctx.edge, "Attenuation (dB/km)", 0.2)
    connector_loss = param_number(ctx.edge, "Connector loss (dB)", 0.4)
    splice_loss = param_number(ctx.edge, "Splice loss (dB)", 0.1)
    sensitivity = param_number(ctx.edge, "Receiver sensitivity (dBm)", -30.0)

    loss = attenuation * ctx.distance + connector_loss + splice_loss
    return Partial(
        loss=loss,
        latency=(ctx.distance * 1000) / FIBER_PROPAGATION_SPEED * 1e3,
        coverage=20 / attenuation if attenuation else math.inf,
        capacity=OPTICAL_BANDWIDTH_MHZ * 8,
        margin=(ctx.power - loss) - sensitivity,
    )


def _copper(ctx: LinkContext) -> Partial:
    attenuation_100m = param_number(ctx.edge, "Attenuation (dB/100m)", 19.8)
    nominal_rate = param_number(ctx.edge, "Nominal rate (Mbps)", 1000.0)

    distance_m = ctx.distance * 1000
    if distance_m > COPPER_MAX_LENGTH_M:
        logger.warning(
            "Copper segment of %.1f m exceeds the %.0f m RJ45 limit",
            distance_m,
            COPPER_MAX_LENGTH_M,
        )
    return Partial(
        loss=attenuation_100m * distance_m / 100,
        latency=distance_m * COPPER_DELAY_PER_M * 1000,
        coverage=COPPER_MAX_LENGTH_M / 1000,
        capacity=nominal_rate,
    )


def _line_of_sight(ctx: LinkContext) -> Partial:
    frequency_ghz = param_number(ctx.tx, "Frequency (GHz)", 6.0)
    wavelength = SPEED_OF_LIGHT / (frequency_ghz * 1e9)

    gain_tx_db = first_number(
        [(ctx.tx, "Antenna gain (dBi)"), (ctx.edge, "Tx antenna gain (dBi)")], 45.5
    )
    gain_rx_db = first_number(
        [(ctx.rx, "Antenna gain (dBi)"), (ctx.edge, "Rx antenna gain (dBi)")], 45.5
    )
    guide_tx_m = param_number(ctx.edge, "Tx waveguide length (m)", 70.0)
    guide_rx_m = param_number(ctx.edge, "Rx waveguide length (m)", 30.0)
    guide_loss_100m = param_number(ctx.edge, "Waveguide loss (dB/100m)", 5.0)
    branching_loss = param_number(ctx.edge, "Branching loss (dB)", 5.9)

    guide_loss = (guide_tx_m + guide_rx_m) * guide_loss_100m / 100
    alpha_b = 10 ** (branching_loss / 10)
    alpha_g = 10 ** (guide_loss / 10)
    gain_tx = 10 ** (gain_tx_db / 10)
    gain_rx = 10 ** (gain_rx_db / 10)

    power_mw = 10 ** (ctx.power / 10)
    free_space = (wavelength / (4 * math.pi * ctx.distance * 1e3)) ** 2
    received_mw = power_mw * gain_tx * gain_rx * free_space / (alpha_b * alpha_g)

    return Partial(
        loss=ctx.power - 10 * math.log10(received_mw),
        latency=FIXED_LATENCY_MS[LinkType.LINE_OF_SIGHT],
        coverage=10
        ** ((ctx.config.coverage_budget_db - 32.4 - 20 * math.log10(frequency_ghz)) / 20),
    )


def _radio_common(ctx: LinkContext, link_type: LinkType) -> tuple[float, float]:
    """Return ``(loss, coverage)`` shared by the cellular generations."""
    frequency_mhz = param_number(
        ctx.tx, "Frequency (MHz)", DEFAULT_FREQUENCY_MHZ[link_type]
    )
    gain_tx = param_number(ctx.tx, "Antenna gain (dBi)", 15.0)
    gain_rx = param_number(ctx.rx, "Antenna gain (dBi)", 15.0)
    cable_loss = param_number(ctx.edge, "Cable loss (dB)", 2.0)

    frequency_term = 20 * math.log10(frequency_mhz / 1000)
    free_space_loss = 32.4 + 20 * math.log10(ctx.distance) + frequency_term
    loss = free_space_loss + cable_loss - gain_tx - gain_rx
    coverage = 10 ** ((ctx.config.coverage_budget_db - 32.4 - frequency_term) / 20)
    return loss, coverage


def _gsm(ctx: LinkContext) -> Partial:
    loss, coverage = _radio_common(ctx, LinkType.GSM)
    total_frequencies = param_number(ctx.edge, "Total frequencies", 15.0)
    cell_radius = param_number(ctx.edge, "Cell radius (km)", 1.0)
    i = param_number(ctx.edge, "i", 2.0)
    j = param_number(ctx.edge, "j", 1.0)
    total_area = param_number(ctx.edge, "Total area (km2)", 1000.0)

    n = cluster_size(i, j)
    frequencies_per_cell = total_frequencies / n
    return Partial(
        loss=loss,
        latency=FIXED_LATENCY_MS[LinkType.GSM],
        coverage=coverage,
        frequencies_per_cell=frequencies_per_cell,
        reuse_distance=cell_radius * math.sqrt(3 * n),
        # Each cluster reuses the full set, one 200 kHz channel per frequency
        cellular_capacity=cell_count(total_area, cell_radius)
        * frequencies_per_cell
        * GSM_CHANNEL_MHZ,
    )


def _umts(ctx: LinkContext) -> Partial:
    loss, coverage = _radio_common(ctx, LinkType.UMTS)
    spreading_factor = param_number(ctx.edge, "Spreading factor (SF)", 128.0)
    cell_radius = param_number(ctx.edge, "Range (km)", 2.0)
    total_area = param_number(ctx.edge, "Total area (km2)", 1000.0)

    cells = cell_count(total_area, cell_radius)
    max_users_per_cell = UMTS_CHIP_RATE / (ctx.bitrate_bps * spreading_factor)
    load_factor = min(0.8, 1 / (1 + cells * 0.05))
    return Partial(
        loss=loss,
        latency=FIXED_LATENCY_MS[LinkType.UMTS],
        coverage=coverage,
        reuse_distance=cell_radius * math.sqrt(3),
        cellular_capacity=cells
        * max_users_per_cell
        * (ctx.bitrate_bps / 1e6)
        * load_factor,
    )


def _lte(ctx: LinkContext) -> Partial:
    loss, coverage = _radio_common(ctx, LinkType.LTE)
    bandwidth = param_number(ctx.edge, "Bandwidth (MHz)", 20.0)
    mimo_layers = param_number(ctx.edge, "MIMO layers", 2.0)
    modulation = param_text(ctx.edge, "Modulation", "64QAM")
    code_rate = param_number(ctx.edge, "Code rate", 0.75)
    cell_radius = param_number(ctx.edge, "Range (km)", 1.0)
    total_area = param_number(ctx.edge, "Total area (km2)", 1000.0)

    per_cell = bandwidth * mimo_layers * spectral_efficiency(
        LinkType.LTE, modulation, code_rate
    )
    cells = cell_count(total_area, cell_radius)
    # Reuse factor 1: every cell contributes, degraded by inter-cell SINR
    effective_per_cell = per_cell * interference_reduction_4g(cells)
    return Partial(
        loss=loss,
        latency=FIXED_LATENCY_MS[LinkType.LTE],
        coverage=coverage,
        cellular_capacity=cells * effective_per_cell,
    )


def _nr(ctx: LinkContext) -> Partial:
    loss, coverage = _radio_common(ctx, LinkType.NR)
    band = (
        FrequencyBand.parse(param_text(ctx.edge, "Frequency band", FrequencyBand.SUB_6.value))
        or FrequencyBand.SUB_6
    )
    mmwave = band is FrequencyBand.MMWAVE
    bandwidth = param_number(ctx.edge, "Bandwidth (MHz)", 400.0 if mmwave else 100.0)
    mimo_layers = param_number(ctx.edge, "MIMO layers", 16.0 if mmwave else 8.0)
    mu = int(param_number(ctx.edge, "Numerology (mu)", 1))
    modulation = param_text(ctx.edge, "Modulation", "256QAM")
    beamforming_gain = param_number(
        ctx.edge, "Beamforming gain (dB)", 20.0 if mmwave else 10.0
    )
    cell_radius = param_number(ctx.edge, "Range (km)", 0.5 if mmwave else 2.0)
    total_area = param_number(ctx.edge, "Total area (km2)", 1000.0)

    per_cell = bandwidth * mimo_layers * spectral_efficiency(LinkType.NR, modulation)
    cells = cell_count(total_area, cell_radius)
    effective_per_cell = per_cell * interference_reduction_5g(
        cells, beamforming_gain, band
    )
    numerology = numerology_5g(bandwidth, mu)
    logger.debug(
        "5G numerology mu=%d: SCS=%d kHz, slot=%s ms",
        mu,
        numerology.subcarrier_spacing,
        numerology.slot_duration,
    )
    return Partial(
        loss=loss - beamforming_gain,
        latency=FIXED_LATENCY_MS[LinkType.NR],
        coverage=coverage,
        cellular_capacity=cells * effective_per_cell * NETWORK_SLICING_EFFICIENCY,
        numerology=numerology,
        band=band,
    )


_HANDLERS: Dict[LinkType, Handler] = {
    LinkType.OPTICAL: _optical,
    LinkType.COPPER: _copper,
    LinkType.LINE_OF_SIGHT: _line_of_sight,
    LinkType.GSM: _gsm,
    LinkType.UMTS: _umts,
    LinkType.LTE: _lte,
    LinkType.NR: _nr,
}


def _nonzero(value: Optional[float]) -> Optional[float]:
    return value if value else None


def _shannon_bandwidth(ctx: LinkContext, link_type: LinkType, partial: Partial) -> float:
    """Bandwidth (MHz) for the Shannon fallback."""
    fixed = ctx.config.shannon_bandwidth(link_type, partial.band)
    if fixed is not None:
        return fixed
    if ctx.edge and ctx.edge.get("Bandwidth (MHz)") not in (None, ""):
        return param_number(ctx.edge, "Bandwidth (MHz)", 20.0)
    return param_number(ctx.tx, "Bandwidth (kHz)", 20000.0) / 1000


def snr_db(received_power: float, link_type: LinkType, config: EngineConfig) -> float:
    """SNR (dB) of ``received_power`` against the technology's noise floor."""
    return received_power - config.noise_floor(link_type)


def shannon_capacity(bandwidth_mhz: float, snr: float) -> float:
    """Shannon capacity (Mbps) of ``bandwidth_mhz`` at ``snr`` dB.

    Above a few hundred dB, log2(1 + x) equals log2(x) to double precision
    and is taken in log form, so arbitrarily large SNR does not overflow.
    """
    if snr > _SHANNON_LOG_FORM_DB:
        return bandwidth_mhz * snr / (10 * math.log10(2))
    return bandwidth_mhz * math.log2(1 + 10 ** (snr / 10))


def direct_link_budget(
    source: Node,
    target: Node,
    edge: Edge,
    config: Optional[EngineConfig] = None,
) -> LinkBudgetResult:
    """Compute the link budget of ``edge`` from ``source`` to ``target``.

    Missing parameters fall back to their documented defaults. The function
    is pure: identical inputs give identical results.

    Args:
        source: Transmitting node.
        target: Receiving node.
        edge: Edge to evaluate; its link type selects the model.
        config: Engine assumptions. Defaults to ``ENGINE_CONFIG``.

    Returns:
        LinkBudgetResult for the single segment.

    Raises:
        ValueError: If the edge's link type is not recognized, or if the
            parameters make a formula undefined (e.g. a zero radio distance).
        ZeroDivisionError: If a parameter used as a divisor is zero.
    """
    config = config or ENGINE_CONFIG
    link_type = edge.technology
    logger.debug(
        "Direct link: %s (tx) -> %s (rx) [%s]",
        source.label,
        target.label,
        link_type.value,
    )

    modulation_rate = param_number(edge.params, "Modulation rate (baud)", 1200.0)
    valence = param_number(edge.params, "Valence", 16.0)
    ctx = LinkContext(
        tx=source.params,
        rx=target.params,
        edge=edge.params,
        power=param_number(source.params, "Power (dBm)", config.default_tx_power_dbm),
        distance=param_number(edge.params, "Range (km)", config.default_distance_km),
        bitrate_bps=modulation_rate * math.log2(valence),
        config=config,
    )

    partial = _HANDLERS[link_type](ctx)

    received_power = ctx.power - partial.loss
    snr = snr_db(received_power, link_type, config)
    capacity = partial.capacity
    if capacity == 0:
        bandwidth = _shannon_bandwidth(ctx, link_type, partial)
        capacity = shannon_capacity(bandwidth, snr)

    return LinkBudgetResult(
        received_power=received_power,
        loss=partial.loss,
        capacity=capacity,
        coverage=partial.coverage,
        latency=partial.latency,
        snr_db=snr,
        bitrate=ctx.bitrate_bps / 1e6,
        link_type=link_type,
        margin=_nonzero(partial.margin),
        frequencies_per_cell=_nonzero(partial.frequencies_per_cell),
        reuse_distance=_nonzero(partial.reuse_distance),
        cellular_capacity=_nonzero(partial.cellular_capacity),
        numerology=partial.numerology,
    )
