"""
Main function_app.py for the weather messaging Function App.

Registers the Blueprints of the individual function modules:
    weather_publisher - HTTP endpoints that publish to the queue
    weather_consumer  - queue and dead-letter queue triggers
"""
import azure.functions as func

# Import Blueprints from function modules
from weather_publisher.function_app import bp as weather_publisher_bp
from weather_consumer.function_app import bp as weather_consumer_bp

# Create the main Function App and register Blueprints
app = func.FunctionApp()
app.register_functions(weather_publisher_bp)
app.register_functions(weather_consumer_bp)
