"""
Task Manager - Clean Architecture Implementation

Domain-Driven Design layers:
- Domain: Tasks, users and the rules that govern them
- Application: Use cases, authentication and dependency injection
- Infrastructure: Configuration, logging and MongoDB persistence
- Presentation: FastAPI controllers
"""
