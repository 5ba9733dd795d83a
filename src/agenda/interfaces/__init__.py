"""Interfaces (application boundary) for AGENDA.

Defines framework-free application contracts: ABCs for the collaborators the
service layer depends on (repositories, clocks, ID generators) and the
exceptions they may raise. Business rules stay out of this package.

Dependency rule: this package may import `agenda.domain` value types only. It
may be imported by `agenda.service_layer`, `agenda.adapters`, and
`agenda.bootstrap`.
"""
