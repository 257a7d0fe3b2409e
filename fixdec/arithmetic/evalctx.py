"""Evaluation context for decimal arithmetic.

A context carries the settings that are not part of a value: how results
of transcendental functions are rounded when they are narrowed from the
compute scale back to the operand's scale, and which strategy the natural
logarithm uses. Contexts are built once and shared; use let() to derive
a modified one.
"""

from ..core import utils
from ..core import tables
from ..core.ops import RM, LN


RTZ_synonyms = {'rtz', 'tozero', 'roundtozero', 'towardzero', 'roundtowardzero', 'floor', 'truncate'}
RAZ_synonyms = {'raz', 'awayzero', 'roundawayzero', 'ceiling', 'up'}

iterative_synonyms = {'iterative', 'log2', 'newton'}
table_synonyms = {'table', 'tables', 'lookup'}

Decimal_rm = {}
Decimal_rm.update((k, RM.RTZ) for k in RTZ_synonyms)
Decimal_rm.update((k, RM.RAZ) for k in RAZ_synonyms)

Decimal_ln = {}
Decimal_ln.update((k, LN.ITERATIVE) for k in iterative_synonyms)
Decimal_ln.update((k, LN.TABLE) for k in table_synonyms)


def _parse_props(props, rm, ln):
    if 'round' in props:
        rounding = props['round']
        if isinstance(rounding, RM):
            rm = rounding
        else:
            try:
                rm = Decimal_rm[str(rounding).lower()]
            except KeyError:
                raise ValueError('unsupported decimal rounding mode {}'.format(repr(rounding)))

    if 'ln' in props:
        strategy = props['ln']
        if isinstance(strategy, LN):
            ln = strategy
        else:
            try:
                ln = Decimal_ln[str(strategy).lower()]
            except KeyError:
                raise ValueError('unsupported ln strategy {}'.format(repr(strategy)))

    return rm, ln


class DecimalCtx(object):
    """Context for fixed-point decimal arithmetic."""

    # scale of the intermediate results of sqrt, log and pow
    compute_scale = tables.COMPUTE_SCALE

    rm = RM.RTZ
    ln = LN.ITERATIVE

    props = utils.ImmutableDict()

    def __init__(self, props=None, rm=None, ln=None):
        init_rm = self.rm
        init_ln = self.ln

        if props:
            init_rm, init_ln = _parse_props(props, init_rm, init_ln)
            self.props = utils.ImmutableDict(props)

        # arguments are allowed to override properties
        if rm is not None:
            init_rm = rm
        if ln is not None:
            init_ln = ln

        if init_rm not in (RM.RTZ, RM.RAZ):
            raise ValueError('unsupported decimal rounding mode {}'.format(repr(init_rm)))
        if init_ln not in (LN.ITERATIVE, LN.TABLE):
            raise ValueError('unsupported ln strategy {}'.format(repr(init_ln)))

        self.rm = RM(init_rm)
        self.ln = LN(init_ln)

    def let(self, props=None, rm=None, ln=None):
        """Create a new context, updated with any provided properties."""
        new_props = dict(self.props)
        if props:
            new_props.update(props)
        else:
            # keep what we have; explicit fields below still win
            props = {}

        if rm is None and 'round' not in props:
            rm = self.rm
        if ln is None and 'ln' not in props:
            ln = self.ln

        return type(self)(props=new_props, rm=rm, ln=ln)

    def __repr__(self):
        args = ['rm=' + repr(self.rm), 'ln=' + repr(self.ln)]
        if len(self.props) > 0:
            args.append('props=' + repr(dict(self.props)))
        return '{}({})'.format(type(self).__name__, ', '.join(args))

    def __str__(self):
        return '\n'.join([
            type(self).__name__ + ':',
            '    compute_scale: ' + str(self.compute_scale),
            '    rm: ' + self.rm.name,
            '    ln: ' + self.ln.name,
        ])

    def __eq__(self, other):
        if isinstance(other, DecimalCtx):
            return self.rm == other.rm and self.ln == other.ln
        return NotImplemented

    def __hash__(self):
        return hash((self.rm, self.ln))


default_ctx = DecimalCtx()
