# SPDX-License-Identifier: MIT

from daybook.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "events": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }
