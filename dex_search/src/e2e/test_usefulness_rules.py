import pytest
from dexsearch.models import Move, PokemonSet, Species
from dexsearch.usefulness import (
    MoveContext, MoveHeuristics, load_heuristics, move_is_not_useless, rule_holds,
)

def _species(**kw):
    base = dict(id="testmon", name="Testmon", types=("Normal",),
                base_stats={"hp": 80, "atk": 80, "def": 80, "spa": 80, "spd": 80, "spe": 80})
    base.update(kw)
    return Species(**base)

def test_rule_clauses():
    ctx = MoveContext(species=_species(), moves=("bodyslam",), gen=9)
    assert rule_holds([{}], ctx)
    assert not rule_holds([], ctx)
    assert rule_holds([{"without": ["surf"]}], ctx)
    assert not rule_holds([{"without": ["bodyslam"]}], ctx)
    assert rule_holds([{"min_gen": 10}, {"types": ["Normal"]}], ctx)
    assert not rule_holds([{"types": ["Normal"], "max_stat": {"spe": 60}}], ctx)
    with pytest.raises(ValueError):
        rule_holds([{"no_such_condition": 1}], ctx)

def test_weight_based_moves():
    heavy = _species(weightkg=150)
    light_nfe = _species(weightkg=80, evos=("Bigmon",))
    light = _species(weightkg=80)
    assert move_is_not_useless("heavyslam", heavy, (), gen=9)
    assert move_is_not_useless("heavyslam", light_nfe, (), gen=9)
    assert not move_is_not_useless("heavyslam", light, (), gen=9)

def test_forced_verdict_wins():
    move = Move(id="swordsdance", name="Swords Dance", category="Status")
    assert move_is_not_useless("swordsdance", _species(), (), gen=9, move=move)
    assert not move_is_not_useless("swordsdance", _species(), (), gen=9, move=move, forced=False)

def test_generation_one_lists():
    assert move_is_not_useless("amnesia", _species(), (), gen=1)
    assert not move_is_not_useless("thunder", _species(), (), gen=1)
    assert not move_is_not_useless("bubblebeam", _species(), ("surf",), gen=1)
    # Stadium lists only apply to Stadium
    assert move_is_not_useless("fly", _species(), ("drillpeck",), gen=1)
    assert not move_is_not_useless("fly", _species(), ("drillpeck",), gen=1, format_type="stadium")

def test_sleep_moves_and_doubles():
    yawn = Move(id="yawn", name="Yawn", category="Status")
    assert not move_is_not_useless("yawn", _species(), (), gen=9, move=yawn)
    assert move_is_not_useless("yawn", _species(), (), gen=9, move=yawn, format_type="doubles")
    assert move_is_not_useless("helpinghand", _species(), (), gen=9, format_type="doubles")

def test_set_details_feed_the_rules():
    move = Move(id="lastresort", name="Last Resort", category="Physical", base_power=140)
    pset = PokemonSet(species="Testmon", moves=("quickattack", "lastresort"))
    assert move_is_not_useless("lastresort", _species(), (), gen=9, move=move, pset=pset)
    assert not move_is_not_useless("lastresort", _species(), (), gen=9, move=move)

    # a mega stone decides the ability
    pset = PokemonSet(species="Pidgeot", item="Pidgeotite")
    assert move_is_not_useless("zapcannon", _species(), (), gen=9, pset=pset)

def test_strong_move_flags():
    beam = Move(id="hyperbeam", name="Hyper Beam", category="Special", base_power=150, flags=("recharge",))
    assert not move_is_not_useless("hyperbeam", _species(), (), gen=9, move=beam)
    cut = Move(id="leafblade", name="Leaf Blade", category="Physical", base_power=90, flags=("slicing",))
    assert move_is_not_useless("leafblade", _species(), (), gen=9, move=cut)
    assert not move_is_not_useless("bravebird", _species(), (), gen=9,
                                   move=Move(id="bravebird", name="Brave Bird", category="Physical", base_power=120),
                                   heuristics=MoveHeuristics.from_dict({"bad_strong": ["bravebird"]}))

def test_unknown_moves_are_kept():
    assert move_is_not_useless("madeupmove", _species(), (), gen=9)
    assert load_heuristics() is load_heuristics()
