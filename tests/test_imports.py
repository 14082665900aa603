def test_imports():
    import logdensity_jax

    from logdensity_jax.core import LogDensityProblem, evaluate, stresstest
    from logdensity_jax.ad import ADgradient, list_backends
    from logdensity_jax.inference import MALA, find_mode
    from logdensity_jax.transforms import ExpTransform, IdentityTransform

    assert logdensity_jax.__version__
    for name in logdensity_jax.__all__:
        assert hasattr(logdensity_jax, name)

    # backends
    assert {"jax", "jax_forward", "jax_hessian"} <= set(list_backends())
