'''Preference models that draw the honest ballots of voters.

Preference models represent what voters think before they write anything
down. Each model is a distribution over ballots of one type; a voting bloc
draws one ballot per member from its model in every election run.

-   :class:`core.Impartial` - uniformly random ballots of any type,
-   :class:`mallows.Mallows` - rankings clustered around a reference ranking,
-   :class:`core.PlackettLuce` - rankings built from candidate strengths,
-   :class:`core.Manual` - ballots resampled from real data.
'''

from kingmaker.preference.core import *    # noqa
from kingmaker.preference.mallows import Mallows    # noqa
