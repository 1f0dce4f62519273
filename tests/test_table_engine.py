from cardtable.cards import build_deck, shuffle
from cardtable.layout import SEAT_OFFSETS
from cardtable.models import Phase
from cardtable.rng import create_rng
from cardtable.table import TableEngine, next_seed

from .helpers import create_engine, place_bets, start_round


def test_new_engine_is_idle_with_demo_defaults():
    engine = TableEngine()
    assert engine.phase == Phase.IDLE
    assert engine.round is None
    assert engine.round_counter == 0
    assert engine.seed == 42
    assert engine.pot == 0
    assert [seat.label for seat in engine.seats] == [f"Seat {idx}" for idx in range(1, 7)]
    assert all(seat.stack == 200 and seat.bet == 0 and seat.cards == () for seat in engine.seats)


def test_first_round_deals_seed_42_prefix_to_seats():
    engine = create_engine()
    ctx = start_round(engine)
    expected = shuffle(build_deck(), create_rng(42))[:6]

    assert engine.phase == Phase.DEALT
    assert ctx.seed == 42
    assert ctx.round_id == 1
    dealt = [seat.cards[0] for seat in engine.seats]
    assert dealt == list(expected)
    assert len(set(dealt)) == 6
    assert ctx.remaining == ctx.deck[6:]
    assert ctx.hands == {idx: (card,) for idx, card in enumerate(expected)}


def test_two_card_variant_deals_interleaved_passes():
    engine = create_engine(hole_cards=2)
    ctx = start_round(engine)
    deck = shuffle(build_deck(), create_rng(42))
    for seat in engine.seats:
        assert seat.cards == (deck[seat.seat], deck[6 + seat.seat])
    assert len(ctx.remaining) == 40
    all_cards = [card for seat in engine.seats for card in seat.cards]
    assert len(set(all_cards)) == 12


def test_single_bet_moves_chips_into_pot():
    engine = create_engine()
    start_round(engine)
    assert engine.place_bet(2) is True
    seat = engine.seats[2]
    assert seat.stack == 175
    assert seat.bet == 25
    assert engine.pot == 25
    assert all(other.bet == 0 for other in engine.seats if other.seat != 2)


def test_ninth_bet_is_rejected_without_side_effects():
    engine = create_engine()
    start_round(engine)
    outcomes = place_bets(engine, [0] * 8)
    assert outcomes == [True] * 8
    seat = engine.seats[0]
    assert (seat.stack, seat.bet, engine.pot) == (0, 200, 200)

    assert engine.place_bet(0) is False
    assert (seat.stack, seat.bet, engine.pot) == (0, 200, 200)


def test_bet_with_explicit_amount():
    engine = create_engine()
    start_round(engine)
    assert engine.place_bet(1, 200) is True
    assert engine.seats[1].stack == 0
    assert engine.place_bet(1, 1) is False
    assert engine.place_bet(1, 0) is True
    assert engine.pot == 200


def test_bets_from_several_seats_accumulate_in_pot():
    engine = create_engine()
    start_round(engine)
    place_bets(engine, [0, 1, 1, 5])
    assert engine.pot == 100
    assert [seat.bet for seat in engine.seats] == [25, 50, 0, 0, 0, 25]
    assert engine.total_chips() == 6 * 200


def test_redeal_resets_bets_and_pot_but_keeps_stacks():
    engine = create_engine()
    start_round(engine)
    place_bets(engine, [0, 0, 3])
    stacks_before = [seat.stack for seat in engine.seats]

    ctx = start_round(engine)
    assert ctx.round_id == 2
    assert engine.round_counter == 2
    assert engine.pot == 0
    assert all(seat.bet == 0 for seat in engine.seats)
    assert [seat.stack for seat in engine.seats] == stacks_before


def test_redeal_replaces_round_context():
    engine = create_engine()
    first = start_round(engine)
    engine.place_bet(0)
    second = start_round(engine)
    assert second is not first
    assert first.pot == 25
    assert second.pot == 0


def test_seed_sequence_follows_advance_rule_and_wraps():
    engine = create_engine()
    seeds = [start_round(engine).seed for _ in range(9)]
    assert seeds == [42, 179, 316, 453, 590, 727, 864, 1, 138]


def test_each_round_deals_from_its_own_seed():
    engine = create_engine()
    start_round(engine)
    ctx = start_round(engine)
    expected = shuffle(build_deck(), create_rng(179))
    assert ctx.deck == expected
    assert [seat.cards[0] for seat in engine.seats] == list(expected[:6])


def test_next_seed_helper():
    assert next_seed(42) == 179
    assert next_seed(864) == 1
    assert next_seed(999, step=1, modulus=1000) == 0


def test_custom_initial_seed_is_used_for_first_round():
    engine = create_engine(initial_seed=7)
    assert start_round(engine).seed == 7
    assert start_round(engine).seed == 144


def test_table_state_view():
    engine = create_engine()
    start_round(engine)
    engine.place_bet(3)
    state = engine.table_state()
    assert state["round"] == 1
    assert state["seed"] == 42
    assert state["phase"] == "DEALT"
    assert state["pot"] == 25
    assert state["pot_chips"] == 2
    assert state["bet_size"] == 25
    assert state["hole_cards"] == 1
    seat_view = state["seats"][3]
    assert seat_view["label"] == "Seat 4"
    assert seat_view["stack"] == 175
    assert seat_view["bet"] == 25
    assert seat_view["cards"] == [engine.seats[3].cards[0].label]
    assert seat_view["layout"] == {"x": 0, "y": 200, "alignment": "center", "variant": "bottom"}


def test_idle_table_state_has_no_cards():
    state = create_engine().table_state()
    assert state["phase"] == "IDLE"
    assert state["round"] == 0
    assert all(seat["cards"] == [] for seat in state["seats"])


def test_deal_targets_are_keyed_by_round_and_follow_deal_order():
    engine = create_engine()
    assert engine.deal_targets() == []
    start_round(engine)
    targets = engine.deal_targets()
    assert [target["seat"] for target in targets] == list(range(6))
    assert [target["order"] for target in targets] == list(range(6))
    first_card = engine.seats[0].cards[0].label
    assert targets[0]["id"] == f"Seat 1-1-{first_card}"
    assert targets[0]["offset"] == {"x": SEAT_OFFSETS[0][0], "y": SEAT_OFFSETS[0][1]}

    start_round(engine)
    assert engine.deal_targets()[0]["id"].startswith("Seat 1-2-")


def test_two_card_deal_targets_go_round_the_table_twice():
    engine = create_engine(hole_cards=2)
    start_round(engine)
    targets = engine.deal_targets()
    assert [target["seat"] for target in targets] == list(range(6)) * 2
    assert targets[6]["card"] == engine.seats[0].cards[1].label


def test_chip_targets():
    engine = create_engine()
    start_round(engine)
    bet_targets = engine.chip_targets_for_bet(1, key=3)
    assert bet_targets == [
        {"id": "bet-1-3", "seat": 1, "offset": {"x": 200, "y": -120}, "chip_count": 2}
    ]
    assert engine.chip_targets_for_bet(1, key=4, amount=100)[0]["chip_count"] == 5

    engine.place_bet(0, 120)
    demo = engine.chip_demo_targets(key="k")
    assert len(demo) == 6
    assert demo[0]["id"] == "demo-Seat 1-k-0"
    assert demo[0]["chip_count"] == 6
    assert demo[1]["chip_count"] == 2
