"""Conversion of v2ray geosite data into sing-box geosite databases and rule-sets."""
