# tradelab

A small library for building and testing trading ideas in Python. It has four parts:

- **Filtering** – a linear Kalman filter (`tradelab.kalman_filter.KalmanFilter`), an ensemble Kalman filter that estimates the state covariance from samples (`tradelab.stochastic_ekf.StochasticEKF`) and a bootstrap particle filter (`tradelab.particle_filter.ParticleFilter`).
- **Stochastic models** – linear Gaussian models (`tradelab.linear_gaussian.LinearGaussian`, `create_random_walk`) and a one-dimensional stochastic volatility model (`tradelab.stochastic_volatility.StochasticVolatility`).
- **Timers** – repeating timers (`tradelab.timer.Timer`), a single-threaded manager for them (`tradelab.timer_manager.TimerManager`) and a hand-driven clock (`tradelab.dummy_clock.DummyClock`).
- **A simulated market** – a price-time priority order book (`tradelab.order_book.OrderBook`) that takes fill-and-kill orders, quote updates and quote deletes; clients (`tradelab.client.BasicClient`) that receive responses and private fills through a `tradelab.client_updater.ClientUpdater`; and `tradelab.market.Market`, which queues client orders and processes them.

Supporting modules:

- `tradelab.dispatcher.EventDispatcher` – calls the handlers registered for an event's exact type, in registration order.
- `tradelab.hash_id` – `make_hash_id(client_id, product_id, quote_id)` packs a 16-bit client id, 16-bit product id and 32-bit quote id into one integer (out-of-range values raise `ValueError`); `extract_hash_id` unpacks it.
- `tradelab.statistics.calculate_covariance(x, y)` – sample cross-covariance of the columns of two arrays, rows being observations.
- `tradelab.random_sample` – `reseed`, `sample_normal`, `sample_mv_normal(tril)` and `DiscreteDistribution`.
- `tradelab.market_types` – `Side` (`BUY`, `SELL`) and `TOB`, the top of book.
- `tradelab.market_events` – the messages `SubmitFAK`, `SubmitQuoteUpdate`, `SubmitQuoteDelete`, `Response`, `PrivateFill` and the `Result` codes.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Tracking a constant state with a Kalman filter

```python
import numpy as np
from tradelab.linear_gaussian import create_random_walk
from tradelab.kalman_filter import KalmanFilter

state_model = create_random_walk(np.array([[0.0, 0.0], [0.0, 0.0]]))
obs_model = create_random_walk(np.array([[0.5, 0.0], [0.0, 2.0]]))

kf = KalmanFilter(
    np.array([0.0, 10.0]),
    np.array([[1.0, 0.0], [0.0, 5.0]]),
    state_model,
    obs_model,
)
for _ in range(1000):
    kf.update(np.array([1.0, 12.0]))

print(kf.estimate)         # close to [1, 12]
print(kf.predict())        # state model applied to the estimate
innovation, innovation_cov = kf.last_innovation
```

`StochasticEKF` takes the same four arguments plus `num_samples` (default 1000, at least 2). Its `predict()` propagates the samples through the state model and returns their mean. The result is cached until the next `update`.

### A particle filter

```python
import numpy as np
from tradelab.linear_gaussian import create_random_walk
from tradelab.particle_filter import ParticleFilter

prior = create_random_walk(np.diag([1.0, 2.0]))
noise = create_random_walk(np.diag([0.1, 0.2]))

pf = ParticleFilter(
    1000,
    2,
    lambda: prior.mutate([1.0, 12.0]),           # draw from the prior
    lambda particle: particle,                   # transition
    lambda obs, particle: noise.probability(obs, particle),
)
for _ in range(100):
    pf.update([1.0, 12.0])
print(pf.estimate, pf.weights.sum())
```

`LinearGaussian.probability(output, input)` returns `max_prob * exp(-d' Σ⁻¹ d)`, where `d = output - A @ input`. It raises `ValueError` when the noise covariance is singular. `mutate` still works then, for example with an all-zero covariance.

### Repeating timers driven by a manual clock

```python
from tradelab.dummy_clock import DummyClock
from tradelab.timer_manager import TimerManager

clock = DummyClock()                      # starts at 0.0
manager = TimerManager(clock=clock.now)   # default clock is time.monotonic

fired = []
timer_id = manager.create_timer(2.0, lambda: fired.append("tick"))

clock.tick(2.0)
manager.update()           # the timer fires once and is rescheduled for t = 4
manager.delete_timer(timer_id)
```

`TimerManager` keeps its timers ordered by negating their fire times, so it needs numeric times and intervals. A bare `Timer` accepts any times that support `+` and ordering, such as datetimes with timedeltas. Its `check_fire(now)` fires at most once per call.

### Trading against an order book

```python
from tradelab.client import BasicClient
from tradelab.client_updater import ClientUpdater
from tradelab.dispatcher import EventDispatcher
from tradelab.market_events import SubmitFAK, SubmitQuoteUpdate, Result
from tradelab.market_types import Side
from tradelab.order_book import OrderBook

updater = ClientUpdater(EventDispatcher())
maker = BasicClient(lambda order: None)
taker = BasicClient(lambda order: None)
updater.connect_client(maker)
updater.connect_client(taker)

book = OrderBook(updater, 0.05)
book.quote_update(SubmitQuoteUpdate(1, maker.client_id, 1, Side.SELL, 1.10, 5, 1))
book.quote_update(SubmitQuoteUpdate(2, maker.client_id, 1, Side.BUY, 1.00, 5, 2))

book.fak(SubmitFAK(3, taker.client_id, 1, Side.BUY, 1.10, 2))
assert taker.get_response().result is Result.OK
print(taker.get_fill())     # PrivateFill(quote_id=0, price=1.1, volume=2)
print(maker.get_response(), maker.get_fill())
print(book.top_of_book())   # Bid: @1/5 | Ask: @1.1/3
```

How the book handles orders:

- A price that is not a multiple of the tick size is rejected with `Result.PRICE_NA_TICK`.
- A quote cannot change side once placed (`Result.CANNOT_AMEND_QUOTE_SIDE`).
- Deleting an unknown quote gives `Result.QUOTE_DOESNT_EXIST`.
- A quote update that crosses the book trades first. Only the remainder rests.
- `set_book(bid_quotes, ask_quotes)` loads an empty book from price levels of `(volume, hash_id)` pairs.
- `quote_details(hash_id)` returns a resting quote's side, price and volume, or `None` if there is no such quote.
- `top_of_book()` raises `ValueError` unless both sides hold quotes.

### The market

`Market(lifetime, tick_size)` holds one order book, for product id 1 (`market.order_book(1)`). `add_client()` returns a connected `BasicClient`. Orders the client registers with `register_fak`, `register_quote_update` or `register_quote_delete` are queued. `run()` processes the next `lifetime` orders from that queue. It blocks until each one arrives. An order for any other product gets `Result.INVALID_PRODUCT`.

## What it does not do

- There is no command-line program and no network connection to a real exchange. The market runs only in-process.
- Nothing is stored between runs.
- `ClientUpdater.send_trade_public` and `send_tob_public` dispatch empty `TradeNotice` and `TOBNotice` events through the `EventDispatcher`. The order book never calls them, so there is no public trade or top-of-book feed.

## Randomness

All sampling draws from one shared numpy generator with a fixed default seed (123), so runs repeat exactly. Call `tradelab.random_sample.reseed(seed)` to change the seed.