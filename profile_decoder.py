#!/usr/bin/env python3
"""Profile the entity decoder to find performance bottlenecks."""

import cProfile
import io
import pstats

from htmlindex import decode, widen

# Sample escaped HTML
text = """
&lt;!DOCTYPE html&gt;
&lt;div class=&quot;container&quot;&gt;
    &lt;p&gt;Caf&eacute; &amp; cr&egrave;me br&ucirc;l&eacute;e &#8212; &euro;5&lt;/p&gt;
    &lt;p&gt;Fire engine: &#128658; &#x1F692; &copy; 2015&lt;/p&gt;
    &lt;p&gt;Bare & ampersands & unknown &entities; stay&lt;/p&gt;
&lt;/div&gt;
""" * 100  # Repeat for more meaningful results

markers = list(range(0, len(text), 7))

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    current = list(markers)
    widen(text, current)
    _ = decode(text, current)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
